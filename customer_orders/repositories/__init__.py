"""
Repository layer - Data access abstractions.

This layer provides data persistence and retrieval over SQLAlchemy,
hiding ORM details from the business logic.
"""

from .customer_repository import CustomerRepository
from .order_repository import OrderRepository

__all__ = ["CustomerRepository", "OrderRepository"]
