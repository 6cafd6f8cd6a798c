"""
Order endpoints.

CRUD on /orders. Creating or re-assigning an order requires the customer
to exist.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..dependencies import get_order_service
from ..schemas import (MAX_ID, ErrorResponse, OrderCreate, OrderListResponse,
                       OrderReplace, OrderResponse, OrderUpdate)
from ..services import OrderService
from .params import OrderId, Page, get_page

router = APIRouter(prefix="/orders", tags=["Orders"])

NOT_FOUND = {404: {"description": "Order or customer not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**NOT_FOUND},
    summary="Place order",
)
def create_order(
    payload: OrderCreate,
    response: Response,
    service: OrderService = Depends(get_order_service),
):
    order = service.create_order(payload)
    response.headers["Location"] = f"/orders/{order.id}"
    return order


@router.get("", response_model=OrderListResponse, summary="List orders")
def list_orders(
    page: Page = Depends(get_page),
    customer_id: Optional[int] = Query(
        None, ge=1, le=MAX_ID, description="Only orders of this customer"
    ),
    service: OrderService = Depends(get_order_service),
):
    """List orders ordered by id."""
    orders, total = service.list_orders(skip=page.skip, limit=page.limit, customer_id=customer_id)
    return OrderListResponse(
        orders=[OrderResponse.model_validate(o) for o in orders],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get(
    "/{order_id}", response_model=OrderResponse, responses={**NOT_FOUND}, summary="Get order"
)
def get_order(order_id: OrderId, service: OrderService = Depends(get_order_service)):
    return service.get_order(order_id)


@router.put(
    "/{order_id}", response_model=OrderResponse, responses={**NOT_FOUND}, summary="Replace order"
)
def replace_order(
    order_id: OrderId,
    payload: OrderReplace,
    service: OrderService = Depends(get_order_service),
):
    return service.update_order(order_id, payload, partial=False)


@router.patch(
    "/{order_id}",
    response_model=OrderResponse,
    responses={400: {"description": "No fields to update", "model": ErrorResponse}, **NOT_FOUND},
    summary="Update order",
)
def update_order(
    order_id: OrderId,
    payload: OrderUpdate,
    service: OrderService = Depends(get_order_service),
):
    """Only updates fields that are provided in the request."""
    return service.update_order(order_id, payload, partial=True)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**NOT_FOUND},
    summary="Delete order",
)
def delete_order(order_id: OrderId, service: OrderService = Depends(get_order_service)):
    service.delete_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
