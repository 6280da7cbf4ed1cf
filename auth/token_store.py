"""JWT token storage in a JSON file."""

import json
import logging

log = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "token"
REFRESH_TOKEN_KEY = "refreshToken"
_TOKEN_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)


class TokenStore:
    def __init__(self, path: str):
        self._path = path
        self._values: dict[str, str] = {}
        self._load()

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    @property
    def access_token(self) -> str | None:
        return self.get(ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> str | None:
        return self.get(REFRESH_TOKEN_KEY)

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str):
        self._values[key] = value
        self._persist()

    def remove(self, key: str):
        if self._values.pop(key, None) is not None:
            self._persist()

    def save(self, access_token: str, refresh_token: str | None = None):
        self._values[ACCESS_TOKEN_KEY] = access_token
        if refresh_token:
            self._values[REFRESH_TOKEN_KEY] = refresh_token
        self._persist()
        log.info("Tokens saved")

    def set_access_token(self, access_token: str):
        self.set(ACCESS_TOKEN_KEY, access_token)
        log.info("Access token updated")

    def clear(self):
        self._values = {}
        self._persist()
        log.info("Tokens cleared")

    def _load(self):
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return
        if not isinstance(data, dict):
            return
        self._values = {k: data[k] for k in _TOKEN_KEYS if isinstance(data.get(k), str)}

    def _persist(self):
        # Read existing file, merge tokens
        data = {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            pass
        if not isinstance(data, dict):
            data = {}

        for key in _TOKEN_KEYS:
            if key in self._values:
                data[key] = self._values[key]
            else:
                data.pop(key, None)

        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
