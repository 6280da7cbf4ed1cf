from api_client import ApiClient

_BASE = "/api/users/profile"


class ProfileService:
    def __init__(self, api_client: ApiClient):
        self._api = api_client

    async def get(self):
        return await self._api.get(_BASE)

    async def update(self, data: dict):
        return await self._api.put(_BASE, json=data)

    async def change_password(self, current_password: str, new_password: str):
        return await self._api.put(f"{_BASE}/password", json={
            "currentPassword": current_password,
            "newPassword": new_password,
        })

    async def update_preferences(self, preferences: dict):
        return await self._api.put(f"{_BASE}/preferences", json=preferences)

    async def get_activity(self, **params):
        return await self._api.get(f"{_BASE}/activity", params=params)

    async def get_login_history(self, **params):
        return await self._api.get(f"{_BASE}/login-history", params=params)

    async def upload_avatar(self, filename: str, content: bytes, content_type: str = "image/png"):
        return await self._api.post(f"{_BASE}/avatar", form={
            "avatar": (filename, content, content_type),
        })

    # ── Two-factor auth ────────────────────────────────────

    async def enable_2fa(self):
        return await self._api.post(f"{_BASE}/2fa/enable")

    async def disable_2fa(self):
        return await self._api.post(f"{_BASE}/2fa/disable")
