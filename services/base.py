"""Shared CRUD wrapper for REST resources."""

from api_client import ApiClient


def _clean(params: dict) -> dict:
    # Blank filters are left out of the query string
    return {k: v for k, v in params.items() if v is not None and v != ""}


class ResourceService:
    path: str = ""

    def __init__(self, api_client: ApiClient):
        self._api = api_client

    def _item(self, item_id) -> str:
        return f"{self.path}/{item_id}"

    async def get_all(self, **params):
        return await self._api.get(self.path, params=_clean(params))

    async def get_by_id(self, item_id):
        return await self._api.get(self._item(item_id))

    async def create(self, data: dict):
        return await self._api.post(self.path, json=data)

    async def update(self, item_id, data: dict):
        return await self._api.put(self._item(item_id), json=data)

    async def delete(self, item_id):
        return await self._api.delete(self._item(item_id))
