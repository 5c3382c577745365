"""Record Predicates - in-memory predicate algebra over plain Python callables.

Invariants:
    - always_false is the OR identity, always_true is the AND identity
    - either/both evaluate left before right and short-circuit like `or`/`and`
    - A fold of N conditions evaluates without recursion: either/both flatten
      nested nodes of their own kind, so evaluation depth is constant

Design Decisions:
    - A predicate is just `record -> bool`, so any lambda or function composes
      with the shipped ones; composites are small frozen callables holding a
      flat tuple of operands
"""

from dataclasses import dataclass
from typing import Any, Callable

from dynquery.core.domain_types import MatchMode
from dynquery.core.predicate_fold import Combinator, select_combinator

RecordPredicate = Callable[[Any], bool]


def always_true(record: Any) -> bool:
    return True


def always_false(record: Any) -> bool:
    return False


@dataclass(frozen=True)
class AnyOf:
    """True when at least one operand holds, checked in order."""
    operands: tuple[RecordPredicate, ...]

    def __call__(self, record: Any) -> bool:
        return any(operand(record) for operand in self.operands)


@dataclass(frozen=True)
class AllOf:
    """True when every operand holds, checked in order."""
    operands: tuple[RecordPredicate, ...]

    def __call__(self, record: Any) -> bool:
        return all(operand(record) for operand in self.operands)


def _operands(predicate: RecordPredicate, kind: type) -> tuple[RecordPredicate, ...]:
    if isinstance(predicate, kind):
        return predicate.operands
    return (predicate,)


def either(left: RecordPredicate, right: RecordPredicate) -> RecordPredicate:
    return AnyOf(_operands(left, AnyOf) + _operands(right, AnyOf))


def both(left: RecordPredicate, right: RecordPredicate) -> RecordPredicate:
    return AllOf(_operands(left, AllOf) + _operands(right, AllOf))


ANY_OF: Combinator[RecordPredicate] = Combinator("any", either, always_false)
ALL_OF: Combinator[RecordPredicate] = Combinator("all", both, always_true)


def record_combinator(mode: MatchMode) -> Combinator[RecordPredicate]:
    return select_combinator(mode == MatchMode.ALL, ANY_OF, ALL_OF)
