"""Health check and basic app tests."""
import pytest

pytestmark = pytest.mark.anyio


async def test_health_check(client):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


async def test_request_id_header(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_openapi_schema(client):
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    schema = response.json()
    assert schema["info"]["title"] == "Content Ops API"
    assert schema["info"]["version"] == "0.1.0"


async def test_metrics_endpoint(client, admin_auth, workspace):
    _, headers = admin_auth
    await client.get("/api/v1/analytics/totals", params={"workspace_id": str(workspace.id)}, headers=headers)
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "analytics_aggregations_total" in response.text
