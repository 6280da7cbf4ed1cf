from api_client import ApiClient


class ChatService:
    def __init__(self, api_client: ApiClient):
        self._api = api_client

    async def send_message(self, message: str):
        return await self._api.post("/api/chat/message", json={"message": message})

    async def get_history(self, **params):
        return await self._api.get("/api/chat/history", params=params)
