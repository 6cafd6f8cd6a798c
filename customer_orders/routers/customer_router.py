"""
Customer endpoints.

CRUD on /customers plus the orders owned by one customer.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..dependencies import get_customer_service
from ..schemas import (CustomerCreate, CustomerListResponse, CustomerReplace,
                       CustomerResponse, CustomerUpdate, ErrorResponse,
                       OrderListResponse, OrderResponse)
from ..services import CustomerService
from .params import CustomerId, Page, get_page

router = APIRouter(prefix="/customers", tags=["Customers"])

NOT_FOUND = {404: {"description": "Customer not found", "model": ErrorResponse}}
CONFLICT = {409: {"description": "Email already registered", "model": ErrorResponse}}


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CONFLICT},
    summary="Create customer",
)
def create_customer(
    payload: CustomerCreate,
    response: Response,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a customer. Emails are unique, compared case-insensitively."""
    customer = service.create_customer(payload)
    response.headers["Location"] = f"/customers/{customer.id}"
    return customer


@router.get("", response_model=CustomerListResponse, summary="List customers")
def list_customers(
    page: Page = Depends(get_page),
    search: Optional[str] = Query(
        None, max_length=255, description="Case-insensitive match on name or email"
    ),
    service: CustomerService = Depends(get_customer_service),
):
    """List customers ordered by id."""
    customers, total = service.list_customers(skip=page.skip, limit=page.limit, search=search)
    return CustomerListResponse(
        customers=[CustomerResponse.model_validate(c) for c in customers],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={**NOT_FOUND},
    summary="Get customer",
)
def get_customer(
    customer_id: CustomerId, service: CustomerService = Depends(get_customer_service)
):
    return service.get_customer(customer_id)


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={**NOT_FOUND, **CONFLICT},
    summary="Replace customer",
)
def replace_customer(
    customer_id: CustomerId,
    payload: CustomerReplace,
    service: CustomerService = Depends(get_customer_service),
):
    return service.update_customer(customer_id, payload, partial=False)


@router.patch(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={
        400: {"description": "No fields to update", "model": ErrorResponse},
        **NOT_FOUND,
        **CONFLICT,
    },
    summary="Update customer",
)
def update_customer(
    customer_id: CustomerId,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    """Only updates fields that are provided in the request."""
    return service.update_customer(customer_id, payload, partial=True)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**NOT_FOUND},
    summary="Delete customer",
)
def delete_customer(
    customer_id: CustomerId, service: CustomerService = Depends(get_customer_service)
):
    """Delete a customer and every order it owns."""
    service.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{customer_id}/orders",
    response_model=OrderListResponse,
    responses={**NOT_FOUND},
    summary="List customer orders",
)
def list_customer_orders(
    customer_id: CustomerId,
    page: Page = Depends(get_page),
    service: CustomerService = Depends(get_customer_service),
):
    orders, total = service.list_customer_orders(customer_id, skip=page.skip, limit=page.limit)
    return OrderListResponse(
        orders=[OrderResponse.model_validate(o) for o in orders],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )
