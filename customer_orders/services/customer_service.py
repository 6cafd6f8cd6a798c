"""
Customer use cases.

Create, read, update and delete customers, and list the orders they own.
"""

from typing import List, Optional, Tuple, Union

from ..domain.exceptions import (CustomerAlreadyExistsException,
                                 CustomerNotFoundException,
                                 OrderServiceException)
from ..logging_config import get_logger
from ..metrics import track_entity_operation
from ..models import Customer, Order
from ..repositories import CustomerRepository, OrderRepository
from ..schemas import CustomerCreate, CustomerReplace, CustomerUpdate
from .common import changed_fields

logger = get_logger(__name__)


class CustomerService:
    """Customer management backed by the customer and order repositories."""

    def __init__(self, customers: CustomerRepository, orders: OrderRepository):
        """
        Initialize customer service.

        Args:
            customers: Customer repository
            orders: Order repository, used to list a customer's orders
        """
        self.customers = customers
        self.orders = orders

    def create_customer(self, data: CustomerCreate) -> Customer:
        """
        Create a new customer.

        Raises:
            CustomerAlreadyExistsException: If the email is already registered
        """
        try:
            existing = self.customers.get_by_email(data.email)
            if existing:
                raise CustomerAlreadyExistsException(data.email, existing.id)

            customer = self.customers.add(Customer(name=data.name, email=data.email))
        except OrderServiceException:
            track_entity_operation("customer", "create", success=False)
            raise

        track_entity_operation("customer", "create", success=True)
        logger.info("Customer created", customer_id=customer.id)
        return customer

    def get_customer(self, customer_id: int) -> Customer:
        """
        Get a customer by id.

        Raises:
            CustomerNotFoundException: If no customer has this id
        """
        customer = self.customers.get(customer_id)
        if customer is None:
            track_entity_operation("customer", "read", success=False)
            raise CustomerNotFoundException(customer_id)

        track_entity_operation("customer", "read", success=True)
        return customer

    def list_customers(
        self, skip: int = 0, limit: int = 50, search: Optional[str] = None
    ) -> Tuple[List[Customer], int]:
        """Return one page of customers and the total matching count."""
        search = search.strip() if search else None
        items = self.customers.list(skip=skip, limit=limit, search=search)
        total = self.customers.count(search=search)
        return items, total

    def update_customer(
        self, customer_id: int, data: Union[CustomerReplace, CustomerUpdate], partial: bool = True
    ) -> Customer:
        """
        Update a customer.

        With ``partial`` only the fields present in ``data`` are applied,
        otherwise every field is replaced.

        Raises:
            CustomerNotFoundException: If no customer has this id
            CustomerAlreadyExistsException: If the new email belongs to another customer
            ValidationException: If a partial update carries no fields
        """
        try:
            customer = self.customers.get(customer_id)
            if customer is None:
                raise CustomerNotFoundException(customer_id)
            fields = changed_fields(data, partial)

            new_email = fields.get("email")
            if new_email is not None and new_email != customer.email:
                owner = self.customers.get_by_email(new_email)
                if owner is not None and owner.id != customer.id:
                    raise CustomerAlreadyExistsException(new_email, owner.id)

            customer = self.customers.update(customer, fields)
        except OrderServiceException:
            track_entity_operation("customer", "update", success=False)
            raise

        track_entity_operation("customer", "update", success=True)
        logger.info("Customer updated", customer_id=customer.id, fields=sorted(fields))
        return customer

    def delete_customer(self, customer_id: int) -> None:
        """
        Delete a customer together with its orders.

        Raises:
            CustomerNotFoundException: If no customer has this id
        """
        try:
            customer = self.customers.get(customer_id)
            if customer is None:
                raise CustomerNotFoundException(customer_id)
            order_count = self.orders.count(customer_id=customer_id)
            self.customers.delete(customer)
        except OrderServiceException:
            track_entity_operation("customer", "delete", success=False)
            raise

        track_entity_operation("customer", "delete", success=True)
        logger.info("Customer deleted", customer_id=customer_id, orders_deleted=order_count)

    def list_customer_orders(
        self, customer_id: int, skip: int = 0, limit: int = 50
    ) -> Tuple[List[Order], int]:
        """
        Return one page of a customer's orders and their total count.

        Raises:
            CustomerNotFoundException: If no customer has this id
        """
        self.get_customer(customer_id)
        items = self.orders.list(skip=skip, limit=limit, customer_id=customer_id)
        total = self.orders.count(customer_id=customer_id)
        return items, total
