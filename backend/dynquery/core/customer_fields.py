"""Customer Fields - the searchable NamedFields of a customer record.

Invariants:
    - Keys are lower-case snake_case and match Customer attribute names
    - Insertion order is the display order of GET /api/v1/fields

Design Decisions:
    - attrgetter projections: one registry serves SQL (Customer.city) and
      in-memory filtering (customer.city) without duplication
"""

from operator import attrgetter

from dynquery.core.errors import UnknownFieldError
from dynquery.core.predicate_fold import NamedField

CUSTOMER_FIELDS: dict[str, NamedField] = {
    "company_name": NamedField("Company Name", attrgetter("company_name")),
    "contact_name": NamedField("Contact Name", attrgetter("contact_name")),
    "contact_title": NamedField("Contact Title", attrgetter("contact_title")),
    "city": NamedField("City", attrgetter("city")),
    "region": NamedField("Region", attrgetter("region")),
    "country": NamedField("Country", attrgetter("country")),
    "phone": NamedField("Phone", attrgetter("phone")),
}


def resolve_field(key: str) -> NamedField:
    """Look up a searchable field by key (case-insensitive)."""
    field = CUSTOMER_FIELDS.get(key.strip().lower())
    if field is None:
        raise UnknownFieldError(key)
    return field
