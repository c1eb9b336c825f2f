"""Tests for health and root endpoints."""


class TestHealth:
    async def test_health(self, async_client):
        response = await async_client.get("/api/health")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert body["uptime_seconds"] >= 0

    async def test_db_health_memory_backend(self, async_client):
        body = (await async_client.get("/api/health/db")).json()

        assert body["status"] == "healthy"
        assert body["storage"]["name"] == "memory"
        assert body["storage"]["available"] is True

    async def test_root(self, async_client):
        body = (await async_client.get("/")).json()
        assert body["name"] == "Product Authenticity Ledger"

    async def test_root_health(self, async_client):
        assert (await async_client.get("/health")).json()["status"] == "healthy"
