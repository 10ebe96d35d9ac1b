"""Repositories package - persistence access used by the services."""
from app.repositories.pagination import PaginationParams, PagedResult
from app.repositories.product_repository import ProductRepository
from app.repositories.sale_repository import SaleRepository

__all__ = ['PaginationParams', 'PagedResult', 'ProductRepository', 'SaleRepository']
