"""
Service layer - customer and order use cases.
"""

from .customer_service import CustomerService
from .order_service import OrderService

__all__ = ["CustomerService", "OrderService"]
