"""Exceptions raised by the ERP API client."""


class ApiClientError(Exception):
    """Base for errors raised by the client itself."""


class ApiError(ApiClientError):
    """Server answered with HTTP status >= 400."""

    def __init__(self, status: int, body=None, method: str = "", path: str = ""):
        self.status = status
        self.body = body
        self.method = method
        self.path = path
        super().__init__(f"{method} {path} → {status}: {self.message}")

    @property
    def message(self) -> str:
        if isinstance(self.body, dict):
            msg = self.body.get("message") or self.body.get("error")
            if msg:
                return str(msg)
        if isinstance(self.body, str) and self.body:
            return self.body[:200]
        return "request failed"

    @property
    def is_auth_error(self) -> bool:
        return self.status == 401


class RefreshFailed(ApiClientError):
    """Access token could not be renewed; the session has been ended.

    `status` and `body` mirror the refresh endpoint's error response when
    there was one; both are None for timeouts, transport errors and
    unusable payloads.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause

    @property
    def status(self) -> int | None:
        return self.cause.status if isinstance(self.cause, ApiError) else None

    @property
    def body(self):
        return self.cause.body if isinstance(self.cause, ApiError) else None
