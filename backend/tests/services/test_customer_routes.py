"""Customer Routes - CRUD and search over HTTP.

Invariants:
    - POST /customers returns 201; duplicate code returns 409
    - Unknown customer id returns 404 with RESOURCE_NOT_FOUND envelope
    - POST /customers/search folds conditions per match mode
    - Unknown field -> 400 UNKNOWN_FIELD; bad operator -> 400 VALIDATION_ERROR
"""

from uuid import uuid4

from sqlalchemy import select

from dynquery.models.customer import Customer


async def test_create_customer_returns_201(client):
    res = await client.post("/api/v1/customers", json={
        "code": "alfki",
        "company_name": "  Alfreds Futterkiste ",
        "city": "Berlin",
        "country": "Germany",
        "region": "   ",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["code"] == "ALFKI"
    assert body["company_name"] == "Alfreds Futterkiste"
    assert body["region"] is None


async def test_create_duplicate_code_returns_409(client, seed_customers):
    res = await client.post("/api/v1/customers", json={
        "code": "UKSEA", "company_name": "Another Tea House",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_CUSTOMER"


async def test_create_rejects_blank_company_name(client):
    res = await client.post("/api/v1/customers", json={
        "code": "BLANK", "company_name": "   ",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_get_customer(client, seed_customers):
    customer = seed_customers["AROUT"]
    res = await client.get(f"/api/v1/customers/{customer.id}")
    assert res.status_code == 200
    assert res.json()["company_name"] == "Around the Horn"


async def test_get_unknown_customer_returns_404(client):
    res = await client.get(f"/api/v1/customers/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_list_customers_ordered_by_company_name(client, seed_customers):
    res = await client.get("/api/v1/customers", params={"limit": 3})
    assert res.status_code == 200
    assert [c["code"] for c in res.json()] == ["AROUT", "UKPAR", "UKSEA"]


async def test_delete_customer(client, seed_customers, test_db):
    customer = seed_customers["FRPAR"]
    res = await client.delete(f"/api/v1/customers/{customer.id}")
    assert res.status_code == 204

    test_db.expunge_all()
    result = await test_db.execute(
        select(Customer).where(Customer.id == customer.id),
    )
    assert result.scalar_one_or_none() is None


async def test_search_any(client, seed_customers):
    res = await client.post("/api/v1/customers/search", json={
        "conditions": [
            {"field": "country", "operator": "equals", "value": "UK"},
            {"field": "city", "operator": "equals", "value": "Seattle"},
        ],
        "match": "any",
    })
    assert res.status_code == 200
    body = res.json()
    assert body["match"] == "any"
    assert body["count"] == 4
    assert "FRPAR" not in [c["code"] for c in body["customers"]]


async def test_search_all(client, seed_customers):
    res = await client.post("/api/v1/customers/search", json={
        "conditions": [
            {"field": "country", "operator": "equals", "value": "UK"},
            {"field": "city", "operator": "equals", "value": "Seattle"},
        ],
        "match": "all",
    })
    assert res.status_code == 200
    assert [c["code"] for c in res.json()["customers"]] == ["UKSEA"]


async def test_search_defaults_to_any_and_contains(client, seed_customers):
    res = await client.post("/api/v1/customers/search", json={
        "conditions": [{"field": "company_name", "value": "Horn"}],
    })
    body = res.json()
    assert body["match"] == "any"
    assert [c["code"] for c in body["customers"]] == ["AROUT"]


async def test_search_without_conditions_returns_nothing_for_any(client, seed_customers):
    res = await client.post("/api/v1/customers/search", json={})
    assert res.status_code == 200
    assert res.json()["count"] == 0


async def test_search_unknown_field_returns_400(client, seed_customers):
    res = await client.post("/api/v1/customers/search", json={
        "conditions": [{"field": "fax", "value": "555"}],
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "UNKNOWN_FIELD"
    assert error["context"]["field"] == "fax"


async def test_search_bad_operator_returns_validation_error(client):
    res = await client.post("/api/v1/customers/search", json={
        "conditions": [{"field": "city", "operator": "regex", "value": "S.*"}],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_search_rejects_blank_value(client):
    res = await client.post("/api/v1/customers/search", json={
        "conditions": [{"field": "city", "value": "   "}],
    })
    assert res.status_code == 400


async def test_field_catalog(client):
    res = await client.get("/api/v1/fields")
    assert res.status_code == 200
    body = res.json()
    assert {"key": "country", "label": "Country"} in body["fields"]
    assert body["operators"] == ["equals", "contains", "startswith", "endswith"]
    assert body["match_modes"] == ["any", "all"]


async def test_health_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_health_readiness_with_test_db(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_search_without_conditions_returns_everything_for_all(client, seed_customers):
    res = await client.post("/api/v1/customers/search", json={"match": "all"})
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == len(seed_customers)
    assert sorted(c["code"] for c in body["customers"]) == sorted(seed_customers)


async def test_search_error_names_failing_condition(client, seed_customers):
    res = await client.post("/api/v1/customers/search", json={
        "conditions": [
            {"field": "country", "value": "UK"},
            {"field": "city", "value": "Paris"},
            {"field": "fax", "value": "555"},
        ],
    })
    assert res.status_code == 400
    context = res.json()["error"]["context"]
    assert context["field"] == "fax"
    assert context["condition_index"] == 2
