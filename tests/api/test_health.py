# tests/api/test_health.py
import pytest
import yaml

pytestmark = pytest.mark.integration


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "timestamp" in response.json()


async def test_readiness_checks_database(client):
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["database"] == "ok"


async def test_responses_carry_request_headers(client):
    response = await client.get("/health")

    assert "X-Request-ID" in response.headers
    assert float(response.headers["X-Process-Time"]) >= 0


async def test_openapi_yaml_lists_crud_routes(client):
    response = await client.get("/openapi.yaml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/x-yaml")
    schema = yaml.safe_load(response.text)
    assert "/api/v1/categories" in schema["paths"]
    assert "/api/v1/products/{product_id}" in schema["paths"]
