"""
Sales service with transactional logic.
Handles checkout (cart validation, pricing, stock decrement) and the sale
status transitions.

Every public method returns a ServiceResult. Internally the steps raise the
application exceptions; `_execute` is the single place where they are turned
into failure results and the unit of work is committed or rolled back.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.blueprints.metrics import observe_sale_operation
from app.exceptions import (
    BusinessLogicError, ECommerceError, InsufficientStockError, NotFoundError, StorageError
)
from app.models import Sale, SaleLine, SaleStatus
from app.repositories import PaginationParams, ProductRepository, SaleRepository
from app.services.pricing_service import price_line, sale_total
from app.services.result import ServiceResult
from app.services.sale_lifecycle import ensure_transition, is_regression
from app.services.sale_projection import paged_response, sale_to_response

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = 'There was an unexpected error that occurred'


@dataclass(frozen=True)
class CartItem:
    product_id: int
    quantity: int


@dataclass
class CreateSaleRequest:
    """Checkout request: the cart plus the shipping address snapshot."""
    items: List[CartItem] = field(default_factory=list)
    notes: Optional[str] = None
    street_number: str = ''
    street_name: str = ''
    city: str = ''
    state: str = ''
    country: str = ''
    zip_code: str = ''


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def merge_cart_items(items: List[CartItem]) -> List[CartItem]:
    """
    Validate the cart and fold repeated product ids into a single line.

    Quantities of a repeated product are summed; the merged line keeps the
    position of the product's first occurrence.

    Raises:
        BusinessLogicError: Empty cart, a non-integer id or quantity, or a quantity <= 0
    """
    if not items:
        raise BusinessLogicError('A sale must contain at least one item.')

    merged = {}
    for item in items:
        if not _is_int(item.product_id):
            raise BusinessLogicError(f'Product id {item.product_id!r} must be an integer.')
        if not _is_int(item.quantity):
            raise BusinessLogicError(
                f'Quantity for product with Id {item.product_id} must be an integer.'
            )
        if item.quantity <= 0:
            raise BusinessLogicError(
                f'Quantity for product with Id {item.product_id} must be greater than 0.'
            )
        # Merge if duplicate
        if item.product_id in merged:
            merged[item.product_id] += item.quantity
        else:
            merged[item.product_id] = item.quantity

    return [CartItem(product_id=pid, quantity=qty) for pid, qty in merged.items()]


def _utcnow():
    return datetime.now(timezone.utc)


ADDRESS_FIELDS = ('street_number', 'street_name', 'city', 'state', 'country', 'zip_code')


def _check_text_fields(request: CreateSaleRequest) -> None:
    """Reject notes or address values that are not strings."""
    if request.notes is not None and not isinstance(request.notes, str):
        raise BusinessLogicError('Notes must be text.')
    for name in ADDRESS_FIELDS:
        value = getattr(request, name)
        if value is not None and not isinstance(value, str):
            raise BusinessLogicError(f"Address field '{name}' must be text.")


class SalesService:
    """Sale workflow: checkout plus guarded status changes, bound to one session."""

    def __init__(self, session, sales: SaleRepository = None, products: ProductRepository = None):
        self.session = session
        self.sales = sales or SaleRepository(session)
        self.products = products or ProductRepository(session)

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def create_sale(self, request: CreateSaleRequest, customer_id: str) -> ServiceResult:
        """
        Turn a cart into a persisted Pending sale, decrementing stock.

        The whole cart is validated before any stock is touched; the stock
        decrements and the sale insert commit together or not at all.

        Returns:
            ServiceResult whose value is the sale projection (status 201)
        """
        def work():
            if not customer_id:
                raise BusinessLogicError('A customer id is required to create a Sale.')

            _check_text_fields(request)
            items = merge_cart_items(request.items)

            # Rows stay locked until commit/rollback
            products = {
                p.id: p for p in self.products.get_by_ids(
                    [item.product_id for item in items], lock=True
                )
            }

            # Pass 1: validate every line
            for item in items:
                product = products.get(item.product_id)
                if product is None:
                    raise NotFoundError(f'Product with Id {item.product_id} not found.')
                if product.stock_quantity < item.quantity:
                    raise InsufficientStockError(product.name, product.stock_quantity, item.quantity)

            # Pass 2: price lines and decrement stock
            sale = Sale(
                customer_id=customer_id,
                created_at=_utcnow(),
                status=SaleStatus.PENDING,
                notes=request.notes,
                street_number=request.street_number or '',
                street_name=request.street_name or '',
                city=request.city or '',
                state=request.state or '',
                country=request.country or '',
                zip_code=request.zip_code or '',
            )
            prices = []
            for item in items:
                product = products[item.product_id]
                price = price_line(product, item.quantity)
                prices.append(price)

                product.stock_quantity -= item.quantity
                sale.lines.append(SaleLine(
                    product_id=product.id,
                    product=product,
                    quantity=price.quantity,
                    unit_price=price.unit_price,
                    discounted_unit_price=price.discounted_unit_price,
                    gross_price=price.gross_price,
                    final_price=price.final_price,
                ))

            sale.total_price = sale_total(prices)

            self.sales.add(sale)
            self.session.commit()

            logger.info(
                f"Sale #{sale.id} created for customer {customer_id}: "
                f"{len(items)} line(s), total {sale.total_price}"
            )
            return sale_to_response(sale)

        return self._execute(
            'create_sale', work, 'There was an error creating the Sale', success_status=201
        )

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def update_sale_status(self, sale_id: int, new_status) -> ServiceResult:
        """
        Set a sale's status to `new_status` without any guard (admin).

        Moves against the normal flow (e.g. Refunded -> Pending) are applied
        but logged as warnings.
        """
        def work():
            try:
                status = SaleStatus.parse(new_status)
            except ValueError as e:
                raise BusinessLogicError(str(e))

            sale = self._require_sale(sale_id)
            previous = sale.status
            if is_regression(previous, status):
                logger.warning(
                    f"Sale #{sale.id} status forced from {previous.label} to {status.label}"
                )

            sale.status = status
            sale.updated_at = _utcnow()
            self.sales.update(sale)
            self.session.commit()

            return f'The status of Sale #{sale.id} has now been changed to: {status.label}'

        return self._execute(
            'update_sale_status', work, 'There was an error updating the Sale status'
        )

    def cancel_sale(self, sale_id: int) -> ServiceResult:
        """Cancel a Pending or Processing sale (admin)."""
        return self._execute(
            'cancel_sale',
            lambda: self._transition(self._require_sale(sale_id), 'cancel'),
            'There was an error canceling the Sale'
        )

    def user_cancel_sale(self, customer_id: str, sale_id: int) -> ServiceResult:
        """Cancel a sale on behalf of its owner; other customers' sales are not found."""
        return self._execute(
            'user_cancel_sale',
            lambda: self._transition(self._require_sale(sale_id, customer_id), 'cancel'),
            'There was an error canceling the Sale'
        )

    def refund_sale(self, sale_id: int) -> ServiceResult:
        """Refund a Completed sale (admin)."""
        return self._execute(
            'refund_sale',
            lambda: self._transition(self._require_sale(sale_id), 'refund'),
            'There was an error refunding the Sale'
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_sale(self, sale_id: int) -> ServiceResult:
        return self._execute(
            'get_sale',
            lambda: sale_to_response(self._require_sale(sale_id)),
            'There was an error retrieving sale'
        )

    def get_user_sale(self, customer_id: str, sale_id: int) -> ServiceResult:
        return self._execute(
            'get_user_sale',
            lambda: sale_to_response(self._require_sale(sale_id, customer_id)),
            'There was an error retrieving sale'
        )

    def list_sales(self, params: PaginationParams = None) -> ServiceResult:
        params = params or PaginationParams()
        return self._execute(
            'list_sales',
            lambda: paged_response(self.sales.list(params)),
            'There was an error retrieving sales'
        )

    def list_user_sales(self, customer_id: str, params: PaginationParams = None) -> ServiceResult:
        params = params or PaginationParams()
        return self._execute(
            'list_user_sales',
            lambda: paged_response(self.sales.list_for_customer(customer_id, params)),
            'There was an error retrieving sales'
        )

    def count_sales(self) -> ServiceResult:
        message = 'There was an unexpected error retrieving the count of sales from the database'
        return self._execute('count_sales', self.sales.count, message, unexpected_message=message)

    def count_user_sales(self, customer_id: str) -> ServiceResult:
        message = 'There was an unexpected error retrieving the count of sales from the database'
        return self._execute(
            'count_user_sales',
            lambda: self.sales.count_for_customer(customer_id),
            message,
            unexpected_message=message
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_sale(self, sale_id: int, customer_id: str = None) -> Sale:
        if customer_id is None:
            sale = self.sales.get_by_id(sale_id)
        else:
            sale = self.sales.get_for_customer(customer_id, sale_id)
        if sale is None:
            raise NotFoundError(f'Sale with Id {sale_id} not found')
        return sale

    def _transition(self, sale: Sale, action: str) -> str:
        target = ensure_transition(sale, action)
        sale.status = target
        sale.updated_at = _utcnow()
        self.sales.update(sale)
        self.session.commit()

        logger.info(f"Sale #{sale.id} {target.label.lower()}")
        if target is SaleStatus.CANCELED:
            return 'Sale has been canceled, Status is now: Canceled'
        return 'Sale has been refunded. Status is now Refunded'

    def _execute(
        self,
        operation: str,
        work: Callable,
        storage_message: str,
        unexpected_message: str = UNEXPECTED_ERROR,
        success_status: int = 200,
    ) -> ServiceResult:
        """Run `work`, translating any failure into a ServiceResult."""
        try:
            value = work()
        except ECommerceError as e:
            self.session.rollback()
            logger.warning(f"{operation} rejected: {e.message}")
            observe_sale_operation(operation, e.kind.value)
            return ServiceResult.fail(e)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.critical(f"{operation} failed in the database: {e}", exc_info=True)
            observe_sale_operation(operation, StorageError.kind.value)
            return ServiceResult.fail(StorageError(f'{storage_message}: {e}'))
        except Exception as e:
            self.session.rollback()
            logger.critical(f"{operation} failed unexpectedly: {e}", exc_info=True)
            observe_sale_operation(operation, StorageError.kind.value)
            return ServiceResult.fail(StorageError(f'{unexpected_message}: {e}'))

        observe_sale_operation(operation, 'success')
        return ServiceResult.ok(value, status_code=success_status)
