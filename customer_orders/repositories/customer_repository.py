"""
SQLAlchemy repository for customers.
"""

from typing import List, Optional

from sqlalchemy import or_

from ..models import Customer
from .base import SQLAlchemyRepository


class CustomerRepository(SQLAlchemyRepository):
    """Data access for Customer rows."""

    entity_name = "customer"

    def get(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID."""
        with self._translate_errors("select"):
            return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def get_by_email(self, email: str) -> Optional[Customer]:
        """Get customer by email."""
        with self._translate_errors("select"):
            return self.db.query(Customer).filter(Customer.email == email.lower()).first()

    def _filtered(self, search: Optional[str] = None):
        query = self.db.query(Customer)
        if search:
            # % and _ in the search term match literally
            query = query.filter(
                or_(
                    Customer.name.icontains(search, autoescape=True),
                    Customer.email.icontains(search, autoescape=True),
                )
            )
        return query

    def list(self, skip: int = 0, limit: int = 100, search: Optional[str] = None) -> List[Customer]:
        """List customers ordered by id, optionally matching name or email."""
        with self._translate_errors("select"):
            return self._filtered(search).order_by(Customer.id).offset(skip).limit(limit).all()

    def count(self, search: Optional[str] = None) -> int:
        """Count customers, with the same filter as list."""
        with self._translate_errors("count"):
            return self._filtered(search).count()
