"""Customer Store - create, read, list, and delete customers.

Invariants:
    - code is unique: creating a duplicate raises DuplicateCustomerError (409),
      including when a concurrent insert wins between check and commit
    - Lookups by id raise ResourceNotFoundError (404) when absent
    - Every write commits before returning
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dynquery.core.domain_types import CustomerId
from dynquery.core.errors import DuplicateCustomerError, ResourceNotFoundError
from dynquery.models.customer import Customer
from dynquery.schemas.customer import CustomerCreate

logger = logging.getLogger(__name__)


async def create_customer(db: AsyncSession, data: CustomerCreate) -> Customer:
    existing = await db.execute(
        select(Customer.id).where(Customer.code == data.code),
    )
    if existing.scalar_one_or_none() is not None:
        raise DuplicateCustomerError(data.code)
    customer = Customer(**data.model_dump())
    db.add(customer)
    try:
        await db.commit()
    except IntegrityError:
        # code taken by a concurrent insert after the existence check
        await db.rollback()
        raise DuplicateCustomerError(data.code) from None
    await db.refresh(customer)
    logger.info("Customer created", extra={"customer_code": customer.code})
    return customer


async def get_customer(db: AsyncSession, customer_id: CustomerId) -> Customer:
    result = await db.execute(
        select(Customer).where(Customer.id == customer_id),
    )
    customer = result.scalar_one_or_none()
    if customer is None:
        raise ResourceNotFoundError("Customer", str(customer_id))
    return customer


async def list_customers(
    db: AsyncSession, limit: int, offset: int = 0,
) -> list[Customer]:
    result = await db.execute(
        select(Customer)
        .order_by(Customer.company_name, Customer.code)
        .limit(limit)
        .offset(offset),
    )
    return list(result.scalars().all())


async def delete_customer(db: AsyncSession, customer_id: CustomerId) -> None:
    customer = await get_customer(db, customer_id)
    await db.delete(customer)
    await db.commit()
    logger.info("Customer deleted", extra={"customer_code": customer.code})
