from httpx import AsyncClient

from leadsync.server.core import constant


async def test_health_check(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client: AsyncClient):
    response = await client.get("http://localhost/version")
    assert response.status_code == 200
    assert response.json() == {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}


async def test_process_time_header(client: AsyncClient):
    response = await client.get("/health")
    assert float(response.headers["X-Process-Time"]) >= 0


async def test_openapi_lists_routes(client: AsyncClient):
    response = await client.get("/api/v1/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/api/v1/leads" in paths
    assert "/api/v1/discovery/places" in paths
    assert "/api/v1/webhooks/stripe" in paths
    assert "/api/v1/webhooks/square" in paths
    assert "/api/v1/payments/stripe/sync" in paths
