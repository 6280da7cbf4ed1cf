"""Central HTTP client for the ERP backend. JWT auth with auto-refresh."""

import asyncio
import dataclasses
import logging
from typing import Any, Callable

import aiohttp
from pydantic import ValidationError

from auth.refresh import RefreshCoordinator
from auth.token_store import TokenStore
from errors import ApiError, RefreshFailed
from models import RefreshResponse
from version import __version__

log = logging.getLogger(__name__)

DEFAULT_REFRESH_PATH = "/api/auth/refresh"


@dataclasses.dataclass(frozen=True)
class Request:
    method: str
    path: str
    params: dict | None = None
    json: Any = None
    form: dict | None = None
    headers: dict = dataclasses.field(default_factory=dict)
    auth: bool = True
    attempt: int = 0

    def needs_refresh(self, status: int) -> bool:
        """Only the first 401 of an authenticated request is worth a refresh."""
        return status == 401 and self.auth and self.attempt == 0

    def replay(self) -> "Request":
        return dataclasses.replace(self, attempt=self.attempt + 1)


def _build_form(fields: dict) -> aiohttp.FormData:
    # FormData is single-use, so a replay needs a fresh one
    form = aiohttp.FormData()
    for name, value in fields.items():
        if isinstance(value, tuple):
            filename, content, *rest = value
            content_type = rest[0] if rest else "application/octet-stream"
            form.add_field(name, content, filename=filename, content_type=content_type)
        else:
            form.add_field(name, str(value))
    return form


async def _read_body(resp: aiohttp.ClientResponse):
    raw = await resp.read()
    if not raw:
        return None
    if resp.content_type == "application/json":
        return await resp.json()
    if resp.content_type.startswith("text/"):
        return await resp.text()
    # Spreadsheets and other downloads stay as bytes
    return raw


class ApiClient:
    def __init__(
        self,
        server_url: str,
        token_store: TokenStore,
        *,
        timeout: float = 30.0,
        refresh_path: str = DEFAULT_REFRESH_PATH,
        on_session_end: Callable[[], None] | None = None,
    ):
        self._base = server_url.rstrip("/")
        self._tokens = token_store
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._refresh_path = refresh_path
        self._on_session_end = on_session_end
        self._session: aiohttp.ClientSession | None = None
        self._refresh = RefreshCoordinator()

    @property
    def tokens(self) -> TokenStore:
        return self._tokens

    @property
    def refresh(self) -> RefreshCoordinator:
        return self._refresh

    def set_session_end_handler(self, handler: Callable[[], None] | None):
        self._on_session_end = handler

    async def _ensure_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"User-Agent": f"erp-client/{__version__}"},
            )

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, *exc):
        await self.close()

    def _url(self, path: str) -> str:
        return f"{self._base}{path}"

    # ── Request pipeline ───────────────────────────────────

    async def request(
        self, method: str, path: str, *, params=None, json=None, form=None,
        headers=None, auth=True,
    ):
        req = Request(
            method.upper(), path, params=params, json=json, form=form,
            headers=dict(headers or {}), auth=auth,
        )
        sent = self._tokens.access_token if auth else None
        try:
            return await self._send(req, sent)
        except ApiError as e:
            if not req.needs_refresh(e.status):
                raise
            rejected = e

        token = await self._refresh.acquire_or_wait(lambda: self._renew(rejected, sent))
        return await self._send(req.replay(), token)

    async def get(self, path: str, **kwargs):
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs):
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs):
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs):
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs):
        return await self.request("DELETE", path, **kwargs)

    async def _send(self, req: Request, token: str | None):
        await self._ensure_session()
        headers = dict(req.headers)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        data = _build_form(req.form) if req.form is not None else None

        try:
            async with self._session.request(
                req.method, self._url(req.path), params=req.params, json=req.json,
                data=data, headers=headers,
            ) as resp:
                body = await _read_body(resp)
                if resp.status >= 400:
                    log.error("API %s %s → %d: %s", req.method, req.path, resp.status,
                              str(body)[:200])
                    raise ApiError(resp.status, body, req.method, req.path)
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.error("API %s %s error: %r", req.method, req.path, e)
            raise

    # ── Token refresh ──────────────────────────────────────

    async def _renew(self, rejected: ApiError, sent_token: str | None) -> str:
        current = self._tokens.access_token
        if sent_token != current:
            # A previous cycle already settled this: either it renewed the
            # token (replay with it) or it ended the session.
            if current is None:
                raise rejected
            return current

        refresh_token = self._tokens.refresh_token
        if not refresh_token:
            log.warning("Access token rejected and no refresh token stored")
            self._end_session()
            raise rejected

        await self._ensure_session()
        try:
            async with self._session.post(
                self._url(self._refresh_path), json={"refreshToken": refresh_token},
            ) as resp:
                body = await _read_body(resp)
                if resp.status != 200:
                    raise ApiError(resp.status, body, "POST", self._refresh_path)
            payload = RefreshResponse.model_validate(body)
            if payload.token is None:
                raise ValueError("refresh response carries no token")
        except (aiohttp.ClientError, asyncio.TimeoutError, ApiError, ValidationError,
                ValueError) as e:
            log.error("Token refresh failed: %r", e)
            self._end_session()
            raise RefreshFailed(f"token refresh failed: {e!r}", cause=e) from e

        if payload.data.refreshToken:
            self._tokens.save(payload.token, payload.data.refreshToken)
        else:
            self._tokens.set_access_token(payload.token)
        log.info("Access token refreshed")
        return payload.token

    def _end_session(self):
        self._tokens.clear()
        if self._on_session_end is not None:
            self._on_session_end()
