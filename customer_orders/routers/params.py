"""Path and query parameters shared by the customer and order endpoints."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import HTTPException, Path, Query, status

from ..config import settings
from ..schemas import MAX_ID

# Ids outside the INTEGER column range can never match a row
CustomerId = Annotated[int, Path(ge=1, le=MAX_ID, description="Customer id")]
OrderId = Annotated[int, Path(ge=1, le=MAX_ID, description="Order id")]


@dataclass
class Page:
    skip: int
    limit: int


def get_page(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE, ge=1, description="Maximum number of records to return"
    ),
) -> Page:
    """Validate paging parameters against the configured maximum page size."""
    if limit > settings.MAX_PAGE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"limit must not exceed {settings.MAX_PAGE_SIZE}",
        )
    return Page(skip=skip, limit=limit)
