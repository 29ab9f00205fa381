"""Cart model - persistent cart for salespeople."""
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from vyaapar.database import Base


class Cart(Base):
    """
    Cart - Persistent shopping cart owned by a salesperson.

    One cart per salesperson (enforced by UNIQUE constraint). The cart is
    never deleted: checkout and clear empty its items and unset the buyer
    and supplier.
    """

    __tablename__ = 'carts'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    salesperson_id = Column(String(36), ForeignKey('users.id'), nullable=False, unique=True)
    buyer_id = Column(String(36), ForeignKey('users.id'), nullable=True)
    supplier_id = Column(String(36), ForeignKey('users.id'), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    salesperson = relationship('User', foreign_keys=[salesperson_id])
    buyer = relationship('User', foreign_keys=[buyer_id])
    supplier = relationship('User', foreign_keys=[supplier_id])
    items = relationship(
        'CartItem',
        back_populates='cart',
        cascade='all, delete-orphan',
        order_by='CartItem.created_at'
    )

    def __repr__(self):
        return f"<Cart(id={self.id}, salesperson_id={self.salesperson_id})>"
