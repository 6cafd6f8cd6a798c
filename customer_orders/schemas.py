"""Pydantic models for request/response validation."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# Largest value a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


class _RequestModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


# Customer models


class CustomerCreate(_RequestModel):
    """Request model for creating a customer."""

    name: str = Field(..., min_length=1, max_length=255, description="Customer name")
    email: EmailStr = Field(..., description="Unique contact email")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class CustomerReplace(CustomerCreate):
    """Request model for replacing all customer fields."""


class CustomerUpdate(_RequestModel):
    """Request model for partially updating a customer."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value is not None else None


class CustomerResponse(BaseModel):
    """Customer response model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class CustomerListResponse(BaseModel):
    """Response model for a page of customers."""

    customers: list[CustomerResponse]
    total: int
    skip: int
    limit: int


# Order models


class OrderCreate(_RequestModel):
    """Request model for placing an order."""

    product: str = Field(..., min_length=1, max_length=255, description="Product name")
    quantity: int = Field(..., ge=1, description="Number of units")
    customer_id: int = Field(..., ge=1, le=MAX_ID, description="Owning customer")


class OrderReplace(OrderCreate):
    """Request model for replacing all order fields."""


class OrderUpdate(_RequestModel):
    """Request model for partially updating an order."""

    product: Optional[str] = Field(None, min_length=1, max_length=255)
    quantity: Optional[int] = Field(None, ge=1)
    customer_id: Optional[int] = Field(None, ge=1, le=MAX_ID)


class OrderResponse(BaseModel):
    """Order response model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    product: str
    quantity: int
    customer_id: int
    created_at: datetime
    updated_at: datetime


class OrderListResponse(BaseModel):
    """Response model for a page of orders."""

    orders: list[OrderResponse]
    total: int
    skip: int
    limit: int


# Generic models


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict[str, str]
    timestamp: str
