"""In-process ERP backend for client tests."""

import asyncio
import time

from aiohttp import web
from aiohttp.test_utils import TestServer

USER = {"id": 1, "username": "admin", "role": "admin"}
XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLSX_BYTES = b"PK\x03\x04\xff\xfe\x00"


async def wait_until(predicate, timeout: float = 2.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


class FakeBackend:
    """Accepts only `valid_token`; everything else gets a 401."""

    def __init__(self, valid_token="T2", refresh_status=200, refresh_body=None):
        self.valid_token = valid_token
        self.refresh_status = refresh_status
        if refresh_body is None:
            refresh_body = {"success": True, "data": {"token": valid_token}}
        self.refresh_body = refresh_body
        self.refresh_calls: list = []
        self.requests: list[tuple[str, str, str | None]] = []
        self.refresh_gate: asyncio.Event | None = None
        self._server: TestServer | None = None

    @property
    def url(self) -> str:
        return f"http://{self._server.host}:{self._server.port}"

    def hold_refresh(self):
        """Keep refresh calls pending until `refresh_gate` is set."""
        self.refresh_gate = asyncio.Event()

    def requests_to(self, path: str) -> list[str | None]:
        return [auth for _, p, auth in self.requests if p == path]

    async def __aenter__(self):
        self._server = TestServer(self._app())
        await self._server.start_server()
        return self

    async def __aexit__(self, *exc):
        if self.refresh_gate is not None:
            self.refresh_gate.set()
        await self._server.close()

    def _record(self, request: web.Request) -> bool:
        auth = request.headers.get("Authorization")
        self.requests.append((request.method, request.path, auth))
        return auth == f"Bearer {self.valid_token}"

    def _app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/api/auth/refresh", self._refresh)
        app.router.add_post("/api/auth/login", self._login)
        app.router.add_post("/api/auth/logout", self._logout)
        app.router.add_get("/auth/me", self._me)
        app.router.add_get("/api/ping", self._ping)
        app.router.add_get("/api/empty", self._empty)
        app.router.add_get("/api/always-401", self._always_401)
        app.router.add_post("/api/upload", self._upload)
        app.router.add_get("/api/export", self._export)
        app.router.add_route("*", "/api/status/{code}", self._status)
        app.router.add_route("*", "/api/{tail:.*}", self._resource)
        return app

    @staticmethod
    def _unauthorized():
        return web.json_response({"success": False, "message": "Token expired"}, status=401)

    async def _refresh(self, request):
        self.refresh_calls.append(await request.json())
        if self.refresh_gate is not None:
            await self.refresh_gate.wait()
        return web.json_response(self.refresh_body, status=self.refresh_status)

    async def _login(self, request):
        self._record(request)
        data = await request.json()
        if data.get("password") != "secret":
            return web.json_response({"error": "Invalid credentials"}, status=401)
        return web.json_response({"token": self.valid_token, "refreshToken": "R1", "user": USER})

    async def _logout(self, request):
        if not self._record(request):
            return self._unauthorized()
        return web.json_response({"success": True})

    async def _me(self, request):
        if not self._record(request):
            return self._unauthorized()
        return web.json_response({"user": USER})

    async def _ping(self, request):
        self._record(request)
        return web.Response(text="pong")

    async def _empty(self, request):
        self._record(request)
        return web.Response(status=204)

    async def _always_401(self, request):
        self._record(request)
        return self._unauthorized()

    async def _upload(self, request):
        if not self._record(request):
            return self._unauthorized()
        form = await request.post()
        upload = form["file"]
        return web.json_response({
            "filename": upload.filename,
            "size": len(upload.file.read()),
        })

    async def _export(self, request):
        if not self._record(request):
            return self._unauthorized()
        return web.Response(body=XLSX_BYTES, content_type=XLSX_TYPE)

    async def _status(self, request):
        self._record(request)
        code = int(request.match_info["code"])
        return web.json_response({"success": False, "message": f"status {code}"}, status=code)

    async def _resource(self, request):
        if not self._record(request):
            return self._unauthorized()
        body = None
        if request.can_read_body:
            body = await request.json()
        return web.json_response({
            "success": True,
            "path": request.path,
            "query": dict(request.query),
            "body": body,
            "trace": request.headers.get("X-Trace"),
        })
