"""Sales blueprint - JSON API for checkout and the sale lifecycle."""
from flask import Blueprint, current_app, g, jsonify, request

from app.database import get_session
from app.decorators.permissions import admin_only, require_customer
from app.exceptions import BusinessLogicError
from app.repositories import PaginationParams
from app.services.sales_service import CartItem, CreateSaleRequest, SalesService

sales_bp = Blueprint('sales', __name__, url_prefix='/api/sales')


def _service():
    return SalesService(get_session())


def _respond(result):
    """Render a ServiceResult with the status code its outcome maps to."""
    return jsonify(result.to_dict()), result.status_code


def _field(data, *names, default=None):
    """First present key among `names` (snake_case first, then camelCase)."""
    for name in names:
        if name in data:
            return data[name]
    return default


def _parse_int(value, name):
    # JSON true/false decode to bool, which is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise BusinessLogicError(f"'{name}' must be an integer.")
    return value


def _parse_text(data, *names, optional=False):
    value = _field(data, *names)
    if value is None:
        return None if optional else ''
    if not isinstance(value, str):
        raise BusinessLogicError(f"'{names[0]}' must be a string.")
    return value


def _parse_create_request(data):
    if not isinstance(data, dict):
        raise BusinessLogicError('Request body must be a JSON object.')

    raw_items = _field(data, 'items', default=[])
    if not isinstance(raw_items, list):
        raise BusinessLogicError("'items' must be a list.")

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            raise BusinessLogicError('Every item must be an object with product_id and quantity.')
        items.append(CartItem(
            product_id=_parse_int(_field(raw, 'product_id', 'productId'), 'product_id'),
            quantity=_parse_int(_field(raw, 'quantity'), 'quantity'),
        ))

    return CreateSaleRequest(
        items=items,
        notes=_parse_text(data, 'notes', optional=True),
        street_number=_parse_text(data, 'street_number', 'streetNumber'),
        street_name=_parse_text(data, 'street_name', 'streetName'),
        city=_parse_text(data, 'city'),
        state=_parse_text(data, 'state'),
        country=_parse_text(data, 'country'),
        zip_code=_parse_text(data, 'zip_code', 'zipCode'),
    )


def _pagination_params():
    args = request.args
    return PaginationParams(
        page_number=args.get('page_number', args.get('pageNumber', 1, type=int), type=int),
        page_size=args.get(
            'page_size',
            args.get('pageSize', current_app.config.get('DEFAULT_PAGE_SIZE', 10), type=int),
            type=int
        ),
        order_by=args.get('order_by', args.get('orderBy')),
        max_page_size=current_app.config.get('MAX_PAGE_SIZE', 50),
    )


@sales_bp.route('', methods=['POST'])
@require_customer
def create_sale():
    """Checkout the cart in the request body for the calling customer."""
    sale_request = _parse_create_request(request.get_json(silent=True))
    result = _service().create_sale(sale_request, g.customer_id)

    if result.success:
        current_app.logger.info(f"Sale #{result.value['id']} created by {g.customer_id}")
    return _respond(result)


@sales_bp.route('', methods=['GET'])
@admin_only
def list_sales():
    return _respond(_service().list_sales(_pagination_params()))


@sales_bp.route('/count', methods=['GET'])
@admin_only
def count_sales():
    return _respond(_service().count_sales())


@sales_bp.route('/<int:sale_id>', methods=['GET'])
@admin_only
def get_sale(sale_id):
    return _respond(_service().get_sale(sale_id))


@sales_bp.route('/me/sales', methods=['GET'])
@require_customer
def list_my_sales():
    return _respond(_service().list_user_sales(g.customer_id, _pagination_params()))


@sales_bp.route('/me/sales/count', methods=['GET'])
@require_customer
def count_my_sales():
    return _respond(_service().count_user_sales(g.customer_id))


@sales_bp.route('/me/sales/<int:sale_id>', methods=['GET'])
@require_customer
def get_my_sale(sale_id):
    return _respond(_service().get_user_sale(g.customer_id, sale_id))


@sales_bp.route('/<int:sale_id>/status', methods=['PUT'])
@admin_only
def update_sale_status(sale_id):
    """Set an arbitrary status (admin override, no guard)."""
    data = request.get_json(silent=True) or {}
    new_status = _field(data, 'updated_status', 'updatedStatus', 'status')
    if not new_status:
        raise BusinessLogicError("'updated_status' is required.")

    result = _service().update_sale_status(sale_id, new_status)
    if result.success:
        current_app.logger.info(f"Admin {g.customer_id} set Sale #{sale_id} to {new_status}")
    return _respond(result)


@sales_bp.route('/<int:sale_id>/cancel', methods=['POST'])
@admin_only
def admin_cancel_sale(sale_id):
    return _respond(_service().cancel_sale(sale_id))


@sales_bp.route('/me/sales/cancel/<int:sale_id>', methods=['POST'])
@require_customer
def user_cancel_sale(sale_id):
    return _respond(_service().user_cancel_sale(g.customer_id, sale_id))


@sales_bp.route('/<int:sale_id>/refund', methods=['PUT'])
@admin_only
def refund_sale(sale_id):
    return _respond(_service().refund_sale(sale_id))
