"""Settings cache — grouped settings fetched from the server with a TTL."""

import logging
import time

from errors import ApiClientError
from services.settings import SettingsService

log = logging.getLogger(__name__)

# Cache TTL in seconds
_CACHE_TTL = 300


def _unwrap(body):
    """Responses look like {success, data}; keep only `data`."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


class SettingsStore:
    def __init__(self, service: SettingsService, ttl: float = _CACHE_TTL):
        self._service = service
        self._ttl = ttl
        self._settings: dict = {}
        self._cache_time: float | None = None
        self.error: str | None = None

    @property
    def settings(self) -> dict:
        """Settings grouped by category, as last fetched."""
        return self._settings

    @property
    def is_fresh(self) -> bool:
        return self._cache_time is not None and time.monotonic() - self._cache_time < self._ttl

    def get(self, category: str, key: str, default=None):
        group = self._settings.get(category)
        if isinstance(group, dict):
            return group.get(key, default)
        if isinstance(group, list):
            for item in group:
                if isinstance(item, dict) and item.get("key") == key:
                    return item.get("value", default)
        return default

    async def fetch(self, force: bool = False) -> dict:
        """Return cached settings, refetching once the TTL has passed.

        On failure the stale cache is kept and returned; the error message
        is left in `error`.
        """
        if self.is_fresh and not force:
            return self._settings
        try:
            body = await self._service.get_categories()
        except ApiClientError as e:
            self.error = getattr(e, "message", None) or str(e)
            log.warning("Failed to fetch settings: %s", self.error)
            return self._settings
        data = _unwrap(body)
        if isinstance(data, dict):
            self._settings = data
            self._cache_time = time.monotonic()
            self.error = None
            log.info("Settings cache refreshed (%d categories)", len(data))
        return self._settings

    async def update(self, key: str, value):
        result = _unwrap(await self._service.update(key, value))
        await self.fetch(force=True)
        return result

    async def bulk_update(self, settings: dict):
        result = _unwrap(await self._service.bulk_update(settings))
        await self.fetch(force=True)
        return result

    async def create(self, data: dict):
        result = _unwrap(await self._service.create(data))
        await self.fetch(force=True)
        return result

    async def delete(self, key: str) -> bool:
        await self._service.delete(key)
        await self.fetch(force=True)
        return True

    def invalidate(self):
        self._cache_time = None
