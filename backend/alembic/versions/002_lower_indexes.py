"""Expression indexes for case-insensitive search on city and country.

Revision ID: 002_lower_indexes
Revises: 001_customers
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_lower_indexes"
down_revision: Union[str, None] = "001_customers"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_index(
        "ix_customers_lower_city", "customers", [sa.text("lower(city)")],
    )
    op.create_index(
        "ix_customers_lower_country", "customers", [sa.text("lower(country)")],
    )


def downgrade() -> None:
    op.drop_index("ix_customers_lower_country", table_name="customers")
    op.drop_index("ix_customers_lower_city", table_name="customers")
