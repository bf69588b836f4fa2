import pytest

from httpx import ASGITransport, AsyncClient


@pytest.mark.asyncio()
async def test_health_endpoint(store_app) -> None:
    async with AsyncClient(transport=ASGITransport(app=store_app), base_url="http://test") as client:
        response = await client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio()
async def test_health_endpoint_validating_variant(validate_app) -> None:
    async with AsyncClient(transport=ASGITransport(app=validate_app), base_url="http://test") as client:
        response = await client.get("/healthz")

    assert response.status_code == 200
