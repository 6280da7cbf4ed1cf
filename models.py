"""Response models for the auth endpoints."""

from pydantic import BaseModel, model_validator


class TokenData(BaseModel):
    token: str | None = None
    refreshToken: str | None = None


class RefreshResponse(BaseModel):
    success: bool = False
    data: TokenData | None = None

    @property
    def token(self) -> str | None:
        if not self.success or self.data is None:
            return None
        return self.data.token or None


class LoginResponse(BaseModel):
    token: str
    refreshToken: str | None = None
    user: dict | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, value):
        # Some routes answer {success, data: {...}}
        if isinstance(value, dict) and "token" not in value and isinstance(value.get("data"), dict):
            return value["data"]
        return value
