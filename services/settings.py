from api_client import ApiClient


class SettingsService:
    def __init__(self, api_client: ApiClient):
        self._api = api_client

    async def get_categories(self):
        """Settings grouped by category."""
        return await self._api.get("/api/settings/categories")

    async def get_all(self):
        return await self._api.get("/api/settings")

    async def update(self, key: str, value):
        return await self._api.put(f"/api/settings/{key}", json={"value": value})

    async def bulk_update(self, settings: dict):
        return await self._api.put("/api/settings/bulk", json=settings)

    async def create(self, data: dict):
        return await self._api.post("/api/settings", json=data)

    async def delete(self, key: str):
        return await self._api.delete(f"/api/settings/{key}")

    async def test_email(self, to: str):
        return await self._api.post("/api/settings/test-email", json={"to": to})
