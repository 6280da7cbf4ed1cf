"""Post-dated cheque tracking."""

from services.base import ResourceService, _clean

_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ChequeService(ResourceService):
    path = "/api/cheques"

    async def update_status(self, cheque_id, status: str, notes: str | None = None):
        body = {"status": status}
        if notes is not None:
            body["notes"] = notes
        return await self._api.patch(f"{self._item(cheque_id)}/status", json=body)

    async def get_statistics(self, **params):
        return await self._api.get(f"{self.path}/statistics", params=_clean(params))

    async def get_due(self, days: int = 7):
        """Cheques falling due within the next `days` days."""
        return await self._api.get(f"{self.path}/due", params={"days": days})

    # ── Excel import / export ──────────────────────────────

    async def download_template(self) -> bytes:
        return await self._api.get(f"{self.path}/import/template")

    async def validate_import(self, filename: str, content: bytes, content_type: str = _XLSX):
        return await self._api.post(f"{self.path}/import/validate", form={
            "file": (filename, content, content_type),
        })

    async def import_file(self, filename: str, content: bytes, content_type: str = _XLSX):
        return await self._api.post(f"{self.path}/import", form={
            "file": (filename, content, content_type),
        })

    async def export_excel(self, **params) -> bytes:
        """Workbook of the cheques matching the given list filters."""
        return await self._api.get(f"{self.path}/export/excel", params=_clean(params))
