"""
Database models for customer orders service.

SQLAlchemy ORM models for customers and the orders they own.
"""

from typing import Any

from sqlalchemy import (CheckConstraint, Column, DateTime, ForeignKey, Integer,
                        String)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base: Any = declarative_base()


class Customer(Base):
    """
    Customer model.

    Attributes:
        id: Primary key identifier
        name: Customer display name
        email: Unique contact email, stored lower-cased
        created_at: Timestamp of creation
        updated_at: Timestamp of last update
        orders: Orders placed by this customer
    """

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    orders = relationship(
        "Order",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Order.id",
    )

    def __repr__(self) -> str:
        return f"<Customer id={self.id} email={self.email!r}>"


class Order(Base):
    """
    Order model.

    Every order belongs to exactly one existing customer.

    Attributes:
        id: Primary key identifier
        product: Ordered product name
        quantity: Number of units, at least one
        customer_id: Owning customer
        created_at: Timestamp of creation
        updated_at: Timestamp of last update
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    product = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    customer_id = Column(
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    customer = relationship("Customer", back_populates="orders")

    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_orders_quantity_positive"),)

    def __repr__(self) -> str:
        return f"<Order id={self.id} customer_id={self.customer_id} product={self.product!r}>"
