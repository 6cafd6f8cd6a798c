"""
Order use cases.

Every order must reference an existing customer. The reference is checked
here before the write so a missing customer surfaces as a not-found error
rather than a foreign key failure.
"""

from typing import List, Optional, Tuple, Union

from ..domain.exceptions import (CustomerNotFoundException,
                                 OrderNotFoundException, OrderServiceException)
from ..logging_config import get_logger
from ..metrics import track_entity_operation
from ..models import Order
from ..repositories import CustomerRepository, OrderRepository
from ..schemas import OrderCreate, OrderReplace, OrderUpdate
from .common import changed_fields

logger = get_logger(__name__)


class OrderService:
    """Order management backed by the order and customer repositories."""

    def __init__(self, orders: OrderRepository, customers: CustomerRepository):
        self.orders = orders
        self.customers = customers

    def _require_customer(self, customer_id: int) -> None:
        if self.customers.get(customer_id) is None:
            raise CustomerNotFoundException(customer_id)

    def create_order(self, data: OrderCreate) -> Order:
        """
        Place an order for an existing customer.

        Raises:
            CustomerNotFoundException: If the referenced customer does not exist
        """
        try:
            self._require_customer(data.customer_id)
            order = self.orders.add(
                Order(product=data.product, quantity=data.quantity, customer_id=data.customer_id)
            )
        except OrderServiceException:
            track_entity_operation("order", "create", success=False)
            raise

        track_entity_operation("order", "create", success=True)
        logger.info("Order created", order_id=order.id, customer_id=order.customer_id)
        return order

    def get_order(self, order_id: int) -> Order:
        """
        Get an order by id.

        Raises:
            OrderNotFoundException: If no order has this id
        """
        order = self.orders.get(order_id)
        if order is None:
            track_entity_operation("order", "read", success=False)
            raise OrderNotFoundException(order_id)

        track_entity_operation("order", "read", success=True)
        return order

    def list_orders(
        self, skip: int = 0, limit: int = 50, customer_id: Optional[int] = None
    ) -> Tuple[List[Order], int]:
        """Return one page of orders and the total matching count."""
        items = self.orders.list(skip=skip, limit=limit, customer_id=customer_id)
        total = self.orders.count(customer_id=customer_id)
        return items, total

    def update_order(
        self, order_id: int, data: Union[OrderReplace, OrderUpdate], partial: bool = True
    ) -> Order:
        """
        Update an order, re-checking the customer when it changes.

        Raises:
            OrderNotFoundException: If no order has this id
            CustomerNotFoundException: If the new customer does not exist
            ValidationException: If a partial update carries no fields
        """
        try:
            order = self.orders.get(order_id)
            if order is None:
                raise OrderNotFoundException(order_id)
            fields = changed_fields(data, partial)

            new_customer_id = fields.get("customer_id")
            if new_customer_id is not None and new_customer_id != order.customer_id:
                self._require_customer(new_customer_id)

            order = self.orders.update(order, fields)
        except OrderServiceException:
            track_entity_operation("order", "update", success=False)
            raise

        track_entity_operation("order", "update", success=True)
        logger.info("Order updated", order_id=order.id, fields=sorted(fields))
        return order

    def delete_order(self, order_id: int) -> None:
        """
        Delete an order.

        Raises:
            OrderNotFoundException: If no order has this id
        """
        try:
            order = self.orders.get(order_id)
            if order is None:
                raise OrderNotFoundException(order_id)
            self.orders.delete(order)
        except OrderServiceException:
            track_entity_operation("order", "delete", success=False)
            raise

        track_entity_operation("order", "delete", success=True)
        logger.info("Order deleted", order_id=order_id)
