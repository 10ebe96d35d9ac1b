"""Sale Line model."""
from sqlalchemy import Column, BigInteger, Integer, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class SaleLine(Base):
    """Sale Line (one row per distinct product in the cart)."""

    __tablename__ = 'sale_line'
    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_sale_line_quantity_positive'),
        CheckConstraint('discounted_unit_price <= unit_price', name='ck_sale_line_discount_le_price'),
    )

    sale_id = Column(BigInteger, ForeignKey('sale.id'), primary_key=True)
    product_id = Column(BigInteger, ForeignKey('product.id'), primary_key=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(18, 2), nullable=False)
    # Four decimals keep "price minus a 5% multiple" exact
    discounted_unit_price = Column(Numeric(18, 4), nullable=False)
    gross_price = Column(Numeric(18, 2), nullable=False)
    final_price = Column(Numeric(18, 2), nullable=False)

    # Relationships
    sale = relationship('Sale', back_populates='lines')
    product = relationship('Product')

    def __repr__(self):
        return f"<SaleLine(sale_id={self.sale_id}, product_id={self.product_id}, quantity={self.quantity})>"
