"""Leaf Builders - turn (field, operator, value) into one leaf predicate.

Invariants:
    - Same operator table for both representations: a condition means the same
      thing whether the database or Python evaluates it
    - LIKE wildcards in user values match literally (autoescape=True)
    - In memory, a missing (None) value never matches; non-text values are
      compared through str()
    - Unknown operator -> UnsupportedOperatorError, raised at build time so a
      fold over bad input aborts before any query runs

Design Decisions:
    - Explicit dict mapping per operator over if/elif chains (ADR: no auto-discovery)
    - case_insensitive lowers both sides; SQL side uses func.lower so an index
      on lower(column) can serve it
"""

from typing import Any, Callable

from sqlalchemy import ColumnElement, func

from dynquery.core.domain_types import FilterOperator
from dynquery.core.errors import UnsupportedOperatorError
from dynquery.core.predicate_fold import NamedField
from dynquery.core.record_predicates import RecordPredicate

_SQL_COMPARISONS: dict[FilterOperator, Callable[[Any, str], ColumnElement[bool]]] = {
    FilterOperator.EQUALS: lambda column, value: column == value,
    FilterOperator.CONTAINS: lambda column, value: column.contains(value, autoescape=True),
    FilterOperator.STARTSWITH: lambda column, value: column.startswith(value, autoescape=True),
    FilterOperator.ENDSWITH: lambda column, value: column.endswith(value, autoescape=True),
}

_RECORD_COMPARISONS: dict[FilterOperator, Callable[[str, str], bool]] = {
    FilterOperator.EQUALS: lambda actual, value: actual == value,
    FilterOperator.CONTAINS: lambda actual, value: value in actual,
    FilterOperator.STARTSWITH: lambda actual, value: actual.startswith(value),
    FilterOperator.ENDSWITH: lambda actual, value: actual.endswith(value),
}


def coerce_operator(operator: FilterOperator | str) -> FilterOperator:
    """Accept enum members or their string values."""
    try:
        return FilterOperator(operator)
    except ValueError:
        raise UnsupportedOperatorError(str(operator)) from None


def build_sql_leaf(
    model: type,
    field: NamedField,
    operator: FilterOperator | str,
    value: str,
    case_insensitive: bool = False,
) -> ColumnElement[bool]:
    """Leaf expression comparing field's column on model against value."""
    compare = _SQL_COMPARISONS[coerce_operator(operator)]
    column = field.projection(model)
    if case_insensitive:
        return compare(func.lower(column), value.lower())
    return compare(column, value)


def build_record_leaf(
    field: NamedField,
    operator: FilterOperator | str,
    value: str,
    case_insensitive: bool = False,
) -> RecordPredicate:
    """Leaf callable comparing field's projected value on a record against value."""
    compare = _RECORD_COMPARISONS[coerce_operator(operator)]
    expected = value.lower() if case_insensitive else value

    def leaf(record: Any) -> bool:
        actual = field.projection(record)
        if actual is None:
            return False
        if not isinstance(actual, str):
            actual = str(actual)
        if case_insensitive:
            actual = actual.lower()
        return compare(actual, expected)

    return leaf
