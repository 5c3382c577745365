"""Predicate Fold - compose a runtime-sized set of leaf predicates into one predicate.

Invariants:
    - Items processed strictly left to right; the result is left-associated:
      combine(combine(seed, b1), b2) ...
    - Empty items returns the seed object itself (identity law)
    - combine(identity, P) means the same as P for both shipped combinators
    - The fold raises nothing of its own: a failure in build or combine propagates
      unchanged, later items are never built, no partial result escapes
    - Pure: the only side effects are whatever build performs

Design Decisions:
    - Representation-agnostic: the same fold drives in-memory callables
      (record_predicates.py) and SQLAlchemy expression trees (sql_predicates.py)
    - Combinator bundles (combine, identity) so callers pick both with one
      conditional before folding, never a mismatched pair
    - NamedField.projection is an attribute getter: applied to an ORM class it
      yields a column, applied to an instance it yields the value
"""

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, TypeVar

T = TypeVar("T")
V = TypeVar("V")
P = TypeVar("P")
ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class NamedField(Generic[T, V]):
    """A label paired with a projection from a record to one of its values."""
    label: str
    projection: Callable[[T], V]

    def __call__(self, target: T) -> V:
        return self.projection(target)


def fold(
    items: Iterable[ItemT],
    combine: Callable[[P, P], P],
    seed: P,
    build: Callable[[ItemT], P],
) -> P:
    """Reduce items into one predicate, seeded by the combinator's identity.

    seed is expected to be the identity of combine (always-false for OR,
    always-true for AND). This is the caller's responsibility and is not checked.
    """
    accumulator = seed
    for item in items:
        accumulator = combine(accumulator, build(item))
    return accumulator


@dataclass(frozen=True)
class Combinator(Generic[P]):
    """Associative binary predicate operator with its identity element."""
    name: str
    combine: Callable[[P, P], P]
    identity: P

    def fold(self, items: Iterable[ItemT], build: Callable[[ItemT], P]) -> P:
        return fold(items, self.combine, self.identity, build)


def select_combinator(
    match_all: bool, any_of: Combinator[P], all_of: Combinator[P],
) -> Combinator[P]:
    """Pick the AND pair when every leaf must hold, else the OR pair."""
    return all_of if match_all else any_of
