"""Customer Schemas - Pydantic models for customer CRUD at the API boundary.

Invariants:
    - code: 1-5 alphanumeric chars, normalized to upper case
    - company_name: 1-200 chars, stripped, non-empty
    - Optional text fields: stripped, empty string stored as None
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomerCreate(BaseModel):
    """Customer creation payload."""
    code: str = Field(min_length=1, max_length=5, pattern=r"^[A-Za-z0-9]+$")
    company_name: str = Field(min_length=1, max_length=200)
    contact_name: str | None = Field(None, max_length=100)
    contact_title: str | None = Field(None, max_length=100)
    city: str | None = Field(None, max_length=100)
    region: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=40)

    @field_validator("code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()

    @field_validator("company_name")
    @classmethod
    def strip_company_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("company_name cannot be empty or whitespace")
        return v

    @field_validator(
        "contact_name", "contact_title", "city", "region", "country", "phone",
    )
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class CustomerResponse(BaseModel):
    """Customer response - public-facing customer data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    company_name: str
    contact_name: str | None = None
    contact_title: str | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    phone: str | None = None
    created_at: datetime
