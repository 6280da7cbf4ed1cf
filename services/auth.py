from api_client import ApiClient


class AuthService:
    def __init__(self, api_client: ApiClient):
        self._api = api_client

    async def login(self, username: str, password: str):
        return await self._api.post("/api/auth/login", json={
            "username": username,
            "password": password,
        }, auth=False)

    async def register(self, username: str, email: str, password: str, role: str = "user"):
        return await self._api.post("/api/auth/register", json={
            "username": username,
            "email": email,
            "password": password,
            "role": role,
        }, auth=False)

    async def get_profile(self):
        return await self._api.get("/api/auth/profile")

    async def logout(self):
        return await self._api.post("/api/auth/logout")

    async def me(self):
        return await self._api.get("/auth/me")
