"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .repositories import CustomerRepository, OrderRepository
from .services import CustomerService, OrderService


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Build a customer service bound to the request's session."""
    return CustomerService(CustomerRepository(db), OrderRepository(db))


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Build an order service bound to the request's session."""
    return OrderService(OrderRepository(db), CustomerRepository(db))
