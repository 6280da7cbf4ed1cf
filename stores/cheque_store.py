"""Query state for the cheque list: filters, pagination, sorting."""

import dataclasses

_FILTER_KEYS = ("status", "customer_id", "bank_name", "start_date", "end_date")


@dataclasses.dataclass
class ChequeQuery:
    filters: dict = dataclasses.field(default_factory=lambda: dict.fromkeys(_FILTER_KEYS, ""))
    page: int = 1
    limit: int = 10
    total: int = 0
    sort_by: str = "due_date"
    sort_order: str = "ASC"

    def set_filters(self, **filters):
        unknown = set(filters) - set(_FILTER_KEYS)
        if unknown:
            raise ValueError(f"unknown cheque filter(s): {', '.join(sorted(unknown))}")
        self.filters.update(filters)
        self.page = 1

    def reset_filters(self):
        self.filters = dict.fromkeys(_FILTER_KEYS, "")
        self.page = 1
        self.limit = 10
        self.total = 0

    def set_page(self, page: int):
        self.page = max(1, page)

    def set_limit(self, limit: int):
        self.limit = limit
        self.page = 1

    def set_sorting(self, sort_by: str | None = None, sort_order: str | None = None):
        if sort_by:
            self.sort_by = sort_by
        if sort_order:
            order = sort_order.upper()
            if order not in ("ASC", "DESC"):
                raise ValueError(f"sort order must be ASC or DESC, got {sort_order!r}")
            self.sort_order = order

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 1
        return max(1, -(-self.total // self.limit))

    def params(self) -> dict:
        params = {k: v for k, v in self.filters.items() if v not in ("", None)}
        params.update(
            page=self.page,
            limit=self.limit,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
        )
        return params
