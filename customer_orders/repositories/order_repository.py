"""
SQLAlchemy repository for orders.
"""

from typing import List, Optional

from ..models import Order
from .base import SQLAlchemyRepository


class OrderRepository(SQLAlchemyRepository):
    """Data access for Order rows."""

    entity_name = "order"

    def get(self, order_id: int) -> Optional[Order]:
        """Get order by ID."""
        with self._translate_errors("select"):
            return self.db.query(Order).filter(Order.id == order_id).first()

    def _filtered(self, customer_id: Optional[int] = None):
        query = self.db.query(Order)
        if customer_id is not None:
            query = query.filter(Order.customer_id == customer_id)
        return query

    def list(
        self, skip: int = 0, limit: int = 100, customer_id: Optional[int] = None
    ) -> List[Order]:
        """List orders ordered by id, optionally for one customer."""
        with self._translate_errors("select"):
            return self._filtered(customer_id).order_by(Order.id).offset(skip).limit(limit).all()

    def count(self, customer_id: Optional[int] = None) -> int:
        """Count orders, with the same filter as list."""
        with self._translate_errors("count"):
            return self._filtered(customer_id).count()
