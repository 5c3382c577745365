"""Field Catalog - lists what a search condition may reference."""

from fastapi import APIRouter

from dynquery.core.customer_fields import CUSTOMER_FIELDS
from dynquery.core.domain_types import FilterOperator, MatchMode
from dynquery.schemas.search import FieldCatalog, FieldInfo

router = APIRouter(prefix="/api/v1/fields", tags=["fields"])


@router.get("", response_model=FieldCatalog)
async def list_fields():
    return FieldCatalog(
        fields=[
            FieldInfo(key=key, label=field.label)
            for key, field in CUSTOMER_FIELDS.items()
        ],
        operators=list(FilterOperator),
        match_modes=list(MatchMode),
    )
