"""Tests for client-side stores — settings cache and cheque query state."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from errors import ApiError
from services.settings import SettingsService
from stores.cheque_store import ChequeQuery
from stores.settings_store import SettingsStore

GROUPED = {
    "general": {"company_name": "Acme"},
    "stock": [{"key": "low_stock_threshold", "value": 5}],
}


def _service():
    service = MagicMock(spec=SettingsService)
    service.get_categories = AsyncMock(return_value={"success": True, "data": GROUPED})
    service.update = AsyncMock(return_value={"success": True, "data": {"key": "x"}})
    return service


def test_fetch_is_cached():
    async def scenario():
        service = _service()
        store = SettingsStore(service)
        assert await store.fetch() == GROUPED
        await store.fetch()
        assert service.get_categories.await_count == 1
        assert store.is_fresh
        await store.fetch(force=True)
        assert service.get_categories.await_count == 2

    asyncio.run(scenario())


def test_expired_cache_refetches():
    async def scenario():
        service = _service()
        store = SettingsStore(service, ttl=0)
        await store.fetch()
        await store.fetch()
        assert service.get_categories.await_count == 2

    asyncio.run(scenario())


def test_failed_fetch_keeps_stale_cache():
    async def scenario():
        service = _service()
        store = SettingsStore(service)
        await store.fetch()
        service.get_categories.side_effect = ApiError(503, {"message": "maintenance"})
        store.invalidate()
        assert await store.fetch() == GROUPED
        assert store.error == "maintenance"

    asyncio.run(scenario())


def test_update_refetches():
    async def scenario():
        service = _service()
        store = SettingsStore(service)
        await store.fetch()
        assert await store.update("company_name", "Acme Ltd") == {"key": "x"}
        service.update.assert_awaited_once_with("company_name", "Acme Ltd")
        assert service.get_categories.await_count == 2

    asyncio.run(scenario())


def test_get_reads_both_group_shapes():
    async def scenario():
        store = SettingsStore(_service())
        await store.fetch()
        assert store.get("general", "company_name") == "Acme"
        assert store.get("stock", "low_stock_threshold") == 5
        assert store.get("stock", "missing", "n/a") == "n/a"
        assert store.get("email", "smtp_host") is None

    asyncio.run(scenario())


def test_cheque_query_defaults():
    q = ChequeQuery()
    assert q.params() == {"page": 1, "limit": 10, "sort_by": "due_date", "sort_order": "ASC"}


def test_cheque_filters_reset_page():
    q = ChequeQuery()
    q.set_page(4)
    q.set_filters(status="pending", bank_name="")
    assert q.page == 1
    assert q.params()["status"] == "pending"
    assert "bank_name" not in q.params()


def test_cheque_unknown_filter_rejected():
    with pytest.raises(ValueError):
        ChequeQuery().set_filters(colour="red")


def test_cheque_limit_and_sorting():
    q = ChequeQuery()
    q.set_page(3)
    q.set_limit(25)
    q.set_sorting("amount", "desc")
    assert (q.page, q.limit) == (1, 25)
    assert q.params()["sort_order"] == "DESC"
    with pytest.raises(ValueError):
        q.set_sorting(sort_order="sideways")


def test_cheque_pages_and_reset():
    q = ChequeQuery(total=41)
    assert q.pages == 5
    q.set_filters(status="cleared")
    q.reset_filters()
    assert q.filters["status"] == ""
    assert (q.page, q.limit, q.total) == (1, 10, 0)
    assert q.pages == 1
