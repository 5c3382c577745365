"""Customer Search - fold runtime conditions into one filter and run it.

Invariants:
    - Conditions are folded in request order with the combinator picked by match
    - Empty conditions: match=all returns every customer, match=any returns none
      (the seed itself is the WHERE clause)
    - Field/operator errors raised while building abort the search before any
      statement is executed, and carry the failing condition's index
    - Results ordered by company_name, then code (stable across runs)

Design Decisions:
    - The SQL fold and the in-memory fold share the registry, the operator table
      and the fold itself; only the combinator pair and the leaf builder differ
    - Condition ceiling enforced here, not in the schema: it comes from settings
"""

import logging
from typing import Callable, Iterable, Sequence, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from dynquery.core.customer_fields import resolve_field
from dynquery.core.domain_types import MatchMode
from dynquery.core.errors import DynQueryError, TooManyConditionsError
from dynquery.core.leaf_builders import build_record_leaf, build_sql_leaf
from dynquery.core.record_predicates import RecordPredicate, record_combinator
from dynquery.core.sql_predicates import sql_combinator
from dynquery.models.customer import Customer
from dynquery.schemas.search import FieldCondition

logger = logging.getLogger(__name__)

LeafT = TypeVar("LeafT")


def _sql_leaf(condition: FieldCondition) -> ColumnElement[bool]:
    return build_sql_leaf(
        Customer,
        resolve_field(condition.field),
        condition.operator,
        condition.value,
        condition.case_insensitive,
    )


def _record_leaf(condition: FieldCondition) -> RecordPredicate:
    return build_record_leaf(
        resolve_field(condition.field),
        condition.operator,
        condition.value,
        condition.case_insensitive,
    )


def _tag_condition_index(
    build: Callable[[FieldCondition], LeafT],
) -> Callable[[tuple[int, FieldCondition]], LeafT]:
    """Wrap a leaf builder so its errors name the failing condition."""
    def build_indexed(item: tuple[int, FieldCondition]) -> LeafT:
        index, condition = item
        try:
            return build(condition)
        except DynQueryError as exc:
            exc.context.condition_index = index
            raise
    return build_indexed


def build_customer_filter(
    conditions: Iterable[FieldCondition], match: MatchMode,
) -> ColumnElement[bool]:
    """Compose conditions into one WHERE expression over Customer."""
    return sql_combinator(match).fold(
        enumerate(conditions), _tag_condition_index(_sql_leaf),
    )


def build_record_filter(
    conditions: Iterable[FieldCondition], match: MatchMode,
) -> RecordPredicate:
    """Compose conditions into one callable over customer-shaped objects."""
    return record_combinator(match).fold(
        enumerate(conditions), _tag_condition_index(_record_leaf),
    )


def check_condition_count(
    conditions: Sequence[FieldCondition], max_conditions: int,
) -> None:
    if len(conditions) > max_conditions:
        raise TooManyConditionsError(len(conditions), max_conditions)


async def search_customers(
    db: AsyncSession,
    conditions: Sequence[FieldCondition],
    match: MatchMode,
    limit: int,
    max_conditions: int,
) -> list[Customer]:
    """Run the folded filter against the customers table."""
    check_condition_count(conditions, max_conditions)
    where = build_customer_filter(conditions, match)
    query = (
        select(Customer)
        .where(where)
        .order_by(Customer.company_name, Customer.code)
        .limit(limit)
    )
    result = await db.execute(query)
    customers = list(result.scalars().all())
    logger.info(
        "Customer search executed",
        extra={
            "match_mode": match.value,
            "condition_count": len(conditions),
            "result_count": len(customers),
        },
    )
    return customers


def filter_records(
    records: Iterable, conditions: Sequence[FieldCondition], match: MatchMode,
) -> list:
    """In-memory counterpart of search_customers, preserving input order."""
    predicate = build_record_filter(conditions, match)
    return [record for record in records if predicate(record)]
