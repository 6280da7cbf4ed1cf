"""Excel product import: validate the sheet, then submit the valid rows."""

from api_client import ApiClient

_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ImportService:
    def __init__(self, api_client: ApiClient):
        self._api = api_client

    async def validate_file(self, filename: str, content: bytes, content_type: str = _XLSX):
        return await self._api.post("/api/import/validate", form={
            "file": (filename, content, content_type),
        })

    async def process(self, valid_data: list[dict]):
        return await self._api.post("/api/import/process", json={"validData": valid_data})
