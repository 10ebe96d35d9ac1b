"""
Product repository (catalog read access for checkout).

Only the lookups the sale workflow needs live here. Stock decrements are
applied by the caller to the returned (session-attached) Product instances
and persisted by the caller's commit.
"""

from __future__ import annotations

from typing import Iterable, List

from sqlalchemy.orm import Session

from app.models import Product


class ProductRepository:
    """SQLAlchemy-backed product lookups bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_ids(self, product_ids: Iterable[int], lock: bool = False) -> List[Product]:
        """
        Fetch every non-deleted product whose id is in `product_ids`, in one query.

        Missing ids are simply absent from the result.

        Args:
            product_ids: Ids to look up (duplicates are ignored)
            lock: Select the rows FOR UPDATE so concurrent checkouts of the
                same product serialize on the database. Rows are locked in
                ascending id order to keep lock acquisition deadlock-free.

        Returns:
            List[Product] ordered by id
        """
        ids = sorted({int(pid) for pid in product_ids})
        if not ids:
            return []

        query = (
            self.session.query(Product)
            .filter(Product.id.in_(ids), Product.is_deleted.is_(False))
            .order_by(Product.id)
        )
        if lock:
            query = query.with_for_update()
        return query.all()


__all__ = ["ProductRepository"]
