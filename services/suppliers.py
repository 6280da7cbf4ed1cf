from services.base import ResourceService


class SupplierService(ResourceService):
    path = "/api/suppliers"

    async def search(self, term: str):
        return await self._api.get(f"{self.path}/search", params={"q": term})

    # ── Supplier prices ────────────────────────────────────

    async def get_prices(self, supplier_id):
        return await self._api.get(f"/api/supplier-prices/suppliers/{supplier_id}/prices")

    async def add_price(self, supplier_id, data: dict):
        return await self._api.post(f"/api/supplier-prices/suppliers/{supplier_id}/prices", json=data)

    async def update_price(self, price_id, data: dict):
        return await self._api.put(f"/api/supplier-prices/prices/{price_id}", json=data)

    async def delete_price(self, price_id):
        return await self._api.delete(f"/api/supplier-prices/prices/{price_id}")
