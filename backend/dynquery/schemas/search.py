"""Search Schemas - dynamic customer search request and response.

Invariants:
    - FieldCondition.value: 1-200 chars, stripped, non-empty
    - FieldCondition.operator defaults to contains (substring filter)
    - CustomerSearch.match defaults to any; empty conditions are allowed and
      resolve through the combinator identity (any -> none, all -> everything)
    - CustomerSearch.limit: 1-500 when given, settings default otherwise

Design Decisions:
    - field stays a free string here: UnknownFieldError from the registry gives
      a precise 400 naming the field, instead of a generic enum mismatch
"""

from pydantic import BaseModel, Field, field_validator

from dynquery.core.domain_types import FilterOperator, MatchMode
from dynquery.schemas.customer import CustomerResponse


class FieldCondition(BaseModel):
    """One leaf: compare a named field against a value."""
    field: str = Field(min_length=1, max_length=50)
    operator: FilterOperator = FilterOperator.CONTAINS
    value: str = Field(min_length=1, max_length=200)
    case_insensitive: bool = False

    @field_validator("value")
    @classmethod
    def strip_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class CustomerSearch(BaseModel):
    """Search request: conditions folded with the chosen match mode."""
    conditions: list[FieldCondition] = Field(default_factory=list)
    match: MatchMode = MatchMode.ANY
    limit: int | None = Field(None, ge=1, le=500)


class SearchResult(BaseModel):
    match: MatchMode
    count: int
    customers: list[CustomerResponse]


class FieldInfo(BaseModel):
    key: str
    label: str


class FieldCatalog(BaseModel):
    """Searchable fields and the operators each condition may use."""
    fields: list[FieldInfo]
    operators: list[FilterOperator]
    match_modes: list[MatchMode]
