"""Models package - exports all SQLAlchemy models."""
from app.models.category import Category
from app.models.product import Product, DiscountTier
from app.models.sale import Sale, SaleStatus
from app.models.sale_line import SaleLine

__all__ = [
    'Category', 'Product', 'DiscountTier',
    'Sale', 'SaleStatus', 'SaleLine',
]
