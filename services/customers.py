from services.base import ResourceService


class CustomerService(ResourceService):
    path = "/api/customers"

    async def search(self, term: str):
        return await self._api.get(self.path, params={"search": term, "limit": 100})
