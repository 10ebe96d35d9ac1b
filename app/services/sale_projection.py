"""Response shapes for sales (plain dicts ready for jsonify)."""
from app.models import Sale, SaleLine
from app.repositories import PagedResult


def _money(value):
    return str(value) if value is not None else None


def _timestamp(value):
    return value.isoformat() if value is not None else None


def _product_name(line: SaleLine):
    product = line.product
    return product.name if product is not None else None


def sale_line_to_response(line: SaleLine) -> dict:
    return {
        'product_id': line.product_id,
        'product_name': _product_name(line),
        'quantity': line.quantity,
        'unit_price': _money(line.unit_price),
        'discounted_unit_price': _money(line.discounted_unit_price),
        'gross_price': _money(line.gross_price),
        'final_price': _money(line.final_price),
    }


def sale_to_response(sale: Sale) -> dict:
    """Project a Sale and its lines into the API response shape."""
    return {
        'id': sale.id,
        'created_at': _timestamp(sale.created_at),
        'updated_at': _timestamp(sale.updated_at),
        'customer_id': sale.customer_id,
        'total_price': _money(sale.total_price),
        'status': sale.status.value if sale.status is not None else None,
        'notes': sale.notes,
        'shipping_address': {
            'street_number': sale.street_number,
            'street_name': sale.street_name,
            'city': sale.city,
            'state': sale.state,
            'country': sale.country,
            'zip_code': sale.zip_code,
        },
        'items': [sale_line_to_response(line) for line in sale.lines],
    }


def paged_response(paged: PagedResult) -> dict:
    """Project a page of sales."""
    return {
        'items': paged.map(sale_to_response).items,
        'total_count': paged.total_count,
        'current_page': paged.current_page,
        'page_size': paged.page_size,
        'total_pages': paged.total_pages,
    }
