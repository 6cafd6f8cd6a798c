"""
Custom exceptions for the customer orders domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database, etc.).
"""

from typing import Any, Optional


class OrderServiceException(Exception):
    """Base exception for all customer orders service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CustomerNotFoundException(OrderServiceException):
    """Raised when a customer does not exist."""

    def __init__(self, customer_id: int):
        super().__init__(
            message=f"Customer not found: {customer_id}",
            details={"customer_id": customer_id},
        )


class OrderNotFoundException(OrderServiceException):
    """Raised when an order does not exist."""

    def __init__(self, order_id: int):
        super().__init__(
            message=f"Order not found: {order_id}",
            details={"order_id": order_id},
        )


class CustomerAlreadyExistsException(OrderServiceException):
    """Raised when a customer email is already taken."""

    def __init__(self, email: str, existing_id: Optional[int] = None):
        super().__init__(
            message=f"Customer with email {email} already exists",
            details={"email": email, "customer_id": existing_id},
        )


class ValidationException(OrderServiceException):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(
            message=message,
            details={"field": field, "value": str(value), "reason": reason},
        )


class DataIntegrityException(OrderServiceException):
    """Raised when data integrity constraints are violated."""

    def __init__(self, entity: str, reason: str):
        message = f"Data integrity error for {entity}: {reason}"
        super().__init__(message=message, details={"entity": entity, "reason": reason})


class PersistenceException(OrderServiceException):
    """Raised when the database cannot complete an operation."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Database {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )
