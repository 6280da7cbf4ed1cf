from services.base import ResourceService


class PurchaseOrderService(ResourceService):
    path = "/api/purchase-orders"

    async def get_pending(self):
        return await self._api.get(f"{self.path}/pending")

    async def send(self, order_id):
        return await self._api.post(f"{self._item(order_id)}/send")

    async def receive(self, order_id, items: list[dict] | None = None):
        """Mark goods as received; `items` carries per-line received quantities."""
        return await self._api.post(f"{self._item(order_id)}/receive", json={"items": items or []})

    async def cancel(self, order_id):
        return await self._api.post(f"{self._item(order_id)}/cancel")
