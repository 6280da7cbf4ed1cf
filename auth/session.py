"""Signed-in user state on top of the token store."""

import asyncio
import logging
from typing import Callable

import aiohttp
from pydantic import ValidationError

from api_client import ApiClient
from errors import ApiClientError, ApiError
from models import LoginResponse
from services.auth import AuthService

log = logging.getLogger(__name__)


class AuthSession:
    def __init__(self, api_client: ApiClient, on_logged_out: Callable[[], None] | None = None):
        self._api = api_client
        self._auth = AuthService(api_client)
        self._on_logged_out = on_logged_out
        self.user: dict | None = None
        api_client.set_session_end_handler(self.end_session)

    @property
    def is_authenticated(self) -> bool:
        return self._api.tokens.is_authenticated

    async def login(self, username: str, password: str) -> dict | None:
        body = await self._auth.login(username, password)
        try:
            result = LoginResponse.model_validate(body)
        except ValidationError as e:
            raise ApiError(200, body, "POST", "/api/auth/login") from e
        self._api.tokens.save(result.token, result.refreshToken)
        self.user = result.user
        log.info("Logged in as %s", (result.user or {}).get("username", username))
        return self.user

    async def logout(self):
        """Tell the backend (best effort), then forget local credentials."""
        if self.is_authenticated:
            try:
                await self._auth.logout()
            except (ApiClientError, aiohttp.ClientError, asyncio.TimeoutError) as e:
                log.warning("Logout request failed: %s", e)
        self._api.tokens.clear()
        self.user = None
        log.info("Logged out")

    async def ensure_user(self) -> dict | None:
        """Load the current user when a token is stored but no user is known."""
        if not self.is_authenticated or self.user is not None:
            return self.user
        try:
            me = await self._auth.me()
        except ApiClientError as e:
            log.warning("Could not load current user: %s", e)
            self._api.tokens.clear()
            self.user = None
            return None
        self.user = me.get("user") if isinstance(me, dict) else None
        return self.user

    def end_session(self):
        """Called by the API client when the session can't be renewed."""
        self.user = None
        log.warning("Session ended, sign-in required")
        if self._on_logged_out is not None:
            self._on_logged_out()
