"""Order model."""
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Numeric, DateTime, Text, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from vyaapar.database import Base


class OrderStatus(enum.Enum):
    """Order status enum. Orders are always created PENDING."""
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    PROCESSING = 'PROCESSING'
    SHIPPED = 'SHIPPED'
    DELIVERED = 'DELIVERED'
    CANCELLED = 'CANCELLED'


class Order(Base):
    """Order placed by a buyer with a supplier, optionally via a salesperson."""

    __tablename__ = 'orders'
    __table_args__ = (
        # The allocator is advisory; this constraint is the uniqueness guarantee
        UniqueConstraint('order_number', name='uq_orders_order_number'),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number = Column(String(32), nullable=False)
    buyer_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    supplier_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    # NULL for retailer self-orders
    salesperson_id = Column(String(36), ForeignKey('users.id'), nullable=True, index=True)
    status = Column(Enum(OrderStatus, name='order_status'), nullable=False, default=OrderStatus.PENDING)
    total_amount = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    buyer = relationship('User', foreign_keys=[buyer_id])
    supplier = relationship('User', foreign_keys=[supplier_id])
    salesperson = relationship('User', foreign_keys=[salesperson_id])
    lines = relationship('OrderLine', back_populates='order', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Order(id={self.id}, order_number='{self.order_number}', total={self.total_amount})>"
