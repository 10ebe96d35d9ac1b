"""Product model."""
import enum

from sqlalchemy import (
    Column, BigInteger, Integer, String, Boolean, Numeric, DateTime, Enum, ForeignKey, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base, BigIntPK


class DiscountTier(enum.Enum):
    """Percentage discount applied to a product at checkout."""
    NONE = 0
    FIVE_PERCENT = 5
    TEN_PERCENT = 10
    FIFTEEN_PERCENT = 15
    TWENTY_PERCENT = 20
    TWENTY_FIVE_PERCENT = 25
    THIRTY_PERCENT = 30
    THIRTY_FIVE_PERCENT = 35
    FORTY_PERCENT = 40
    FORTY_FIVE_PERCENT = 45
    FIFTY_PERCENT = 50

    @property
    def percent(self) -> int:
        return self.value

    @classmethod
    def from_percent(cls, percent: int) -> 'DiscountTier':
        """Look up a tier by its integer percentage (5 -> FIVE_PERCENT)."""
        return cls(int(percent))


class Product(Base):
    """Product model."""

    __tablename__ = 'product'
    __table_args__ = (
        CheckConstraint('stock_quantity >= 0', name='ck_product_stock_non_negative'),
    )

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    category_id = Column(BigInteger, ForeignKey('category.id'), nullable=True)
    sku = Column(String(50), nullable=True)
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    price = Column(Numeric(18, 2), nullable=False)
    discount = Column(Enum(DiscountTier, name='discount_tier'), nullable=False, default=DiscountTier.NONE)
    stock_quantity = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    # Relationships
    category = relationship('Category', back_populates='products')

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock_quantity})>"
