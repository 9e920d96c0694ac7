import httpx
import pytest

from fulbo.api.main import create_fastapi_app


@pytest.mark.asyncio
async def test_health_endpoint(test_settings):
    app = create_fastapi_app(test_settings)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_root_lists_endpoints_and_leagues(test_settings):
    app = create_fastapi_app(test_settings)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "active"
        assert set(data["leagues"]) == {"laligaes", "premier", "seriea", "ligue1", "bundesliga"}
        assert "quiz" in data["endpoints"]
