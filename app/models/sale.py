"""Sale model."""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Boolean, Numeric, DateTime, Enum
from sqlalchemy.orm import relationship
from app.database import Base, BigIntPK
import enum


class SaleStatus(enum.Enum):
    """Sale status enum."""
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELED = "Canceled"
    REFUNDED = "Refunded"

    @property
    def label(self) -> str:
        """Display name used in user-facing messages."""
        return self.value

    @classmethod
    def parse(cls, raw) -> 'SaleStatus':
        """
        Parse a status from its value ("Completed") or name ("COMPLETED"),
        case-insensitively.

        Raises:
            ValueError: If no status matches.
        """
        if isinstance(raw, cls):
            return raw
        text = str(raw or '').strip().lower()
        for status in cls:
            if text in (status.value.lower(), status.name.lower()):
                return status
        raise ValueError(f"'{raw}' is not a valid sale status")


def _utcnow():
    return datetime.now(timezone.utc)


class Sale(Base):
    """Sale (customer order placed through checkout)."""

    __tablename__ = 'sale'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    customer_id = Column(String(450), nullable=False, index=True)
    total_price = Column(Numeric(18, 2), nullable=False, default=0)
    status = Column(
        Enum(SaleStatus, name='sale_status', values_callable=lambda e: [s.value for s in e]),
        nullable=False,
        default=SaleStatus.PENDING
    )
    notes = Column(Text, nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)

    # Shipping address snapshot taken at checkout
    street_number = Column(String(20), nullable=False, default='')
    street_name = Column(String(200), nullable=False, default='')
    city = Column(String(100), nullable=False, default='')
    state = Column(String(100), nullable=False, default='')
    country = Column(String(100), nullable=False, default='')
    zip_code = Column(String(20), nullable=False, default='')

    # Relationships
    lines = relationship(
        'SaleLine',
        back_populates='sale',
        cascade='all, delete-orphan',
        order_by='SaleLine.product_id'
    )

    def __repr__(self):
        return f"<Sale(id={self.id}, total={self.total_price}, status={self.status.value})>"
