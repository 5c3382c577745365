"""Customer Routes - CRUD plus dynamic search over customers.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Domain errors (unknown field, duplicate code, not found) raised as
      DynQueryError and rendered by the global handler
    - Search limit falls back to settings.search_default_limit
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dynquery.config import Settings, get_settings
from dynquery.core.domain_types import CustomerId
from dynquery.infrastructure.database import get_db
from dynquery.schemas.customer import CustomerCreate, CustomerResponse
from dynquery.schemas.search import CustomerSearch, SearchResult
from dynquery.services import customer_store
from dynquery.services.customer_search import search_customers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.post(
    "", response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    body: CustomerCreate, db: AsyncSession = Depends(get_db),
):
    """Create a customer."""
    return await customer_store.create_customer(db, body)


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """List customers ordered by company name."""
    return await customer_store.list_customers(db, limit, offset)


@router.post("/search", response_model=SearchResult)
async def search(
    body: CustomerSearch,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Fold the request's conditions into one filter and return matches."""
    customers = await search_customers(
        db,
        body.conditions,
        body.match,
        limit=body.limit or settings.search_default_limit,
        max_conditions=settings.search_max_conditions,
    )
    return SearchResult(
        match=body.match,
        count=len(customers),
        customers=[CustomerResponse.model_validate(c) for c in customers],
    )


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Get one customer."""
    return await customer_store.get_customer(db, CustomerId(customer_id))


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Delete one customer."""
    await customer_store.delete_customer(db, CustomerId(customer_id))
