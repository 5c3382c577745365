"""Customer Search - folded filters executed against SQLite.

Invariants:
    - match=any returns customers satisfying at least one condition
    - match=all returns customers satisfying every condition
    - Empty conditions resolve through the identity (any -> none, all -> all)
    - In-memory filter_records agrees with the SQL search on the same data
"""

import pytest
from sqlalchemy import select

from dynquery.core.domain_types import FilterOperator, MatchMode
from dynquery.core.errors import TooManyConditionsError, UnknownFieldError
from dynquery.models.customer import Customer
from dynquery.schemas.search import FieldCondition
from dynquery.services.customer_search import (
    build_customer_filter, filter_records, search_customers,
)

COUNTRY_UK = FieldCondition(field="country", operator="equals", value="UK")
CITY_SEATTLE = FieldCondition(field="city", operator="equals", value="Seattle")


async def _search(db, conditions, match, limit=100, max_conditions=25):
    customers = await search_customers(
        db, conditions, match, limit=limit, max_conditions=max_conditions,
    )
    return [c.code for c in customers]


async def test_any_match_returns_union(test_db, seed_customers):
    codes = await _search(test_db, [COUNTRY_UK, CITY_SEATTLE], MatchMode.ANY)
    assert codes == ["AROUT", "UKPAR", "UKSEA", "FRSEA"]


async def test_all_match_returns_intersection(test_db, seed_customers):
    codes = await _search(test_db, [COUNTRY_UK, CITY_SEATTLE], MatchMode.ALL)
    assert codes == ["UKSEA"]


async def test_empty_any_returns_nothing(test_db, seed_customers):
    assert await _search(test_db, [], MatchMode.ANY) == []


async def test_empty_all_returns_everything(test_db, seed_customers):
    codes = await _search(test_db, [], MatchMode.ALL)
    assert sorted(codes) == sorted(seed_customers)


async def test_single_condition_matches_leaf_alone(test_db, seed_customers):
    any_codes = await _search(test_db, [CITY_SEATTLE], MatchMode.ANY)
    all_codes = await _search(test_db, [CITY_SEATTLE], MatchMode.ALL)
    assert any_codes == all_codes == ["UKSEA", "FRSEA"]


async def test_condition_order_does_not_change_results(test_db, seed_customers):
    forward = await _search(test_db, [COUNTRY_UK, CITY_SEATTLE], MatchMode.ANY)
    backward = await _search(test_db, [CITY_SEATTLE, COUNTRY_UK], MatchMode.ANY)
    assert forward == backward


async def test_limit_caps_results(test_db, seed_customers):
    codes = await _search(test_db, [], MatchMode.ALL, limit=2)
    assert codes == ["AROUT", "UKPAR"]


async def test_substring_filter(test_db, seed_customers):
    condition = FieldCondition(field="company_name", value="Tra")
    assert await _search(test_db, [condition], MatchMode.ANY) == ["UKPAR"]


async def test_case_insensitive_equals(test_db, seed_customers):
    condition = FieldCondition(
        field="city", operator=FilterOperator.EQUALS, value="seattle",
        case_insensitive=True,
    )
    assert await _search(test_db, [condition], MatchMode.ANY) == ["UKSEA", "FRSEA"]


async def test_equals_is_case_sensitive_by_default(test_db, seed_customers):
    condition = FieldCondition(field="city", operator="equals", value="seattle")
    assert await _search(test_db, [condition], MatchMode.ANY) == []


async def test_like_wildcards_in_value_match_literally(test_db):
    test_db.add_all([
        Customer(code="SAVE1", company_name="Save 50% Ltd"),
        Customer(code="SAVE2", company_name="Save 500 Ltd"),
        Customer(code="UNDR1", company_name="A_B Foods"),
        Customer(code="UNDR2", company_name="AXB Foods"),
    ])
    await test_db.commit()
    percent = FieldCondition(field="company_name", value="50%")
    underscore = FieldCondition(field="company_name", operator="startswith", value="A_")
    assert await _search(test_db, [percent], MatchMode.ANY) == ["SAVE1"]
    assert await _search(test_db, [underscore], MatchMode.ANY) == ["UNDR1"]


async def test_unknown_field_aborts_before_query(test_db, seed_customers):
    bad = FieldCondition(field="postal_code", value="98101")
    with pytest.raises(UnknownFieldError):
        await _search(test_db, [COUNTRY_UK, bad], MatchMode.ANY)


async def test_too_many_conditions_rejected(test_db):
    with pytest.raises(TooManyConditionsError) as exc_info:
        await _search(
            test_db, [COUNTRY_UK, CITY_SEATTLE], MatchMode.ANY, max_conditions=1,
        )
    assert exc_info.value.count == 2
    assert exc_info.value.limit == 1


def test_build_customer_filter_is_usable_in_select():
    where = build_customer_filter([COUNTRY_UK, CITY_SEATTLE], MatchMode.ALL)
    sql = str(select(Customer).where(where))
    assert "customers.country" in sql
    assert "customers.city" in sql


@pytest.mark.parametrize("match", [MatchMode.ANY, MatchMode.ALL])
async def test_in_memory_filter_agrees_with_sql(test_db, seed_customers, match):
    conditions = [COUNTRY_UK, CITY_SEATTLE]
    sql_codes = await _search(test_db, conditions, match)

    result = await test_db.execute(
        select(Customer).order_by(Customer.company_name),
    )
    records = result.scalars().all()
    memory_codes = [c.code for c in filter_records(records, conditions, match)]
    assert memory_codes == sql_codes


def test_in_memory_filter_handles_many_conditions():
    conditions = [
        FieldCondition(field="city", operator="equals", value=f"C{i}")
        for i in range(1500)
    ]
    records = [Customer(code="NOWHR", company_name="Nowhere", city="nowhere")]
    assert filter_records(records, conditions, MatchMode.ANY) == []
    assert filter_records(records, conditions, MatchMode.ALL) == []


def test_build_error_carries_condition_index():
    bad = FieldCondition(field="postal_code", value="98101")
    with pytest.raises(UnknownFieldError) as exc_info:
        build_customer_filter([COUNTRY_UK, CITY_SEATTLE, bad], MatchMode.ANY)
    assert exc_info.value.context.condition_index == 2


def test_in_memory_build_error_carries_condition_index():
    bad = FieldCondition(field="fax", value="555")
    with pytest.raises(UnknownFieldError) as exc_info:
        filter_records([], [bad, COUNTRY_UK], MatchMode.ALL)
    assert exc_info.value.context.condition_index == 0
