"""Customer ORM - the record type that runtime-built predicates filter.

Invariants:
    - id is UUID primary key
    - code is a unique 5-character business key (e.g. "ALFKI")
    - company_name is non-nullable; every other descriptive column is optional
    - Attribute names match the keys of core/customer_fields.CUSTOMER_FIELDS

Design Decisions:
    - Plain string columns for location data: search compares text, never joins
    - Indexes on country and city: the fields most searches narrow by
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from dynquery.db.base import Base


class Customer(Base):
    """Customer entity - one company with its contact and location."""
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    code: Mapped[str] = mapped_column(String(5), nullable=False, unique=True)
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True,
    )
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True,
    )
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
