"""
Sale repository (persistence).

This module provides *only* persistence operations for the Sale aggregate.
It does not enforce business rules (status guards, stock checks) and never
commits: the calling service owns the transaction.

Soft-deleted sales are invisible to every query here.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Query, Session, selectinload

from app.models import Sale, SaleLine
from app.repositories.pagination import PagedResult, PaginationParams

_ORDERINGS = {
    "dateAsc": (Sale.created_at.asc(), Sale.id.asc()),
    "dateDesc": (Sale.created_at.desc(), Sale.id.desc()),
    "customerIdAsc": (Sale.customer_id.asc(), Sale.id.asc()),
    "customerIdDesc": (Sale.customer_id.desc(), Sale.id.asc()),
    "saleIdDesc": (Sale.id.desc(),),
}

# Ordering by customer makes no sense inside one customer's listing
_CUSTOMER_ORDERINGS = {"dateAsc", "dateDesc", "saleIdDesc"}

_DEFAULT_ORDERING = (Sale.id.asc(),)


class SaleRepository:
    """SQLAlchemy-backed Sale store bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def _base_query(self) -> Query:
        return (
            self.session.query(Sale)
            .options(selectinload(Sale.lines).selectinload(SaleLine.product))
            .filter(Sale.is_deleted.is_(False))
        )

    def add(self, sale: Sale) -> Sale:
        """Stage a new sale and flush so the store assigns its id."""
        self.session.add(sale)
        self.session.flush()
        return sale

    def update(self, sale: Sale) -> Sale:
        """Flush pending changes of an already-tracked sale."""
        self.session.add(sale)
        self.session.flush()
        return sale

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        """
        Retrieve a single sale with its lines and their products.

        Returns:
            Sale or None if not found
        """
        return self._base_query().filter(Sale.id == sale_id).first()

    def get_for_customer(self, customer_id: str, sale_id: int) -> Optional[Sale]:
        """
        Retrieve a sale only if it belongs to `customer_id`.

        A sale owned by someone else is reported exactly like a missing one.
        """
        return (
            self._base_query()
            .filter(Sale.id == sale_id, Sale.customer_id == customer_id)
            .first()
        )

    def list(self, params: PaginationParams) -> PagedResult[Sale]:
        """Page through every sale using the requested ordering."""
        ordering = _ORDERINGS.get(params.order_by, _DEFAULT_ORDERING)
        return self._paginate(self._base_query(), params, ordering)

    def list_for_customer(self, customer_id: str, params: PaginationParams) -> PagedResult[Sale]:
        """Page through one customer's sales."""
        if params.order_by in _CUSTOMER_ORDERINGS:
            ordering = _ORDERINGS[params.order_by]
        else:
            ordering = _DEFAULT_ORDERING
        query = self._base_query().filter(Sale.customer_id == customer_id)
        return self._paginate(query, params, ordering)

    def count(self) -> int:
        return self.session.query(Sale).filter(Sale.is_deleted.is_(False)).count()

    def count_for_customer(self, customer_id: str) -> int:
        return (
            self.session.query(Sale)
            .filter(Sale.is_deleted.is_(False), Sale.customer_id == customer_id)
            .count()
        )

    @staticmethod
    def _paginate(query: Query, params: PaginationParams, ordering) -> PagedResult[Sale]:
        total = query.order_by(None).count()
        items = (
            query.order_by(*ordering)
            .offset(params.offset)
            .limit(params.page_size)
            .all()
        )
        return PagedResult(
            items=items,
            total_count=total,
            current_page=params.page_number,
            page_size=params.page_size,
        )


__all__ = ["SaleRepository"]
