"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - CustomerId wraps UUID, never use bare UUID in domain logic
    - All valid modes and operators encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, Pydantic validates them natively
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CustomerId = NewType("CustomerId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class MatchMode(str, Enum):
    """How leaf predicates are combined: OR over false, or AND over true."""
    ANY = "any"
    ALL = "all"


class FilterOperator(str, Enum):
    """Leaf comparison applied between a field projection and a runtime value."""
    EQUALS = "equals"
    CONTAINS = "contains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"
