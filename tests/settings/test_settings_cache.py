"""Tests for the store settings cache."""

import asyncio

import pytest

from storefront_sdk.catalog import CurrencySettings
from storefront_sdk.domain.exceptions import StoreAPIError
from storefront_sdk.settings import SettingsCache, resolve_path


@pytest.fixture
def cache(mock_transport) -> SettingsCache:
    return SettingsCache(mock_transport)


class TestResolvePath:
    """Tests for dotted-path resolution."""

    def test_nested(self) -> None:
        assert resolve_path({"a": {"b": {"c": "x"}}}, "a.b.c") == "x"

    def test_missing_segment(self) -> None:
        assert resolve_path({"a": {"b": {}}}, "a.b.c", "fallback") == "fallback"

    def test_stored_none_not_coerced(self) -> None:
        assert resolve_path({"a": None}, "a", "fallback") is None

    def test_through_non_mapping(self) -> None:
        assert resolve_path({"a": "text"}, "a.b", "fallback") == "fallback"

    def test_list_index(self) -> None:
        tree = {"nav": {"items": [{"label": "Home"}, {"label": "Shop"}]}}
        assert resolve_path(tree, "nav.items.1.label") == "Shop"
        assert resolve_path(tree, "nav.items.5.label", "none") == "none"

    def test_empty_path_returns_tree(self) -> None:
        tree = {"a": 1}
        assert resolve_path(tree, "") is tree


class TestSettings:
    """Tests for the settings slot."""

    def test_read_before_fetch_returns_default(self, cache) -> None:
        """Reading before any fetch returns the default."""
        assert cache.get_setting("a.b.c", "fallback") == "fallback"
        assert cache.get_setting("a") is None
        assert not cache.is_loaded()

    @pytest.mark.asyncio
    async def test_read_after_fetch(self, cache, mock_transport) -> None:
        """A fetched tree answers path queries."""
        mock_transport.fetch.return_value = {"a": {"b": {"c": "x"}}}

        await cache.fetch_settings()

        assert cache.get_setting("a.b.c", "fallback") == "x"
        assert cache.is_loaded("settings")
        mock_transport.fetch.assert_awaited_once_with("settings")

    @pytest.mark.asyncio
    async def test_refetch_replaces_whole_tree(self, cache, mock_transport) -> None:
        """A refetch replaces the tree instead of merging into it."""
        mock_transport.fetch.return_value = {"colors": {"primary": "red"}, "old": 1}
        await cache.fetch_settings()
        mock_transport.fetch.return_value = {"colors": {"primary": "blue"}}
        await cache.fetch_settings()

        assert cache.get_setting("colors.primary") == "blue"
        assert cache.get_setting("old", "gone") == "gone"

    @pytest.mark.asyncio
    async def test_failed_fetch_keeps_previous_tree(self, cache, mock_transport) -> None:
        """A failing fetch propagates and leaves the cached tree in place."""
        mock_transport.fetch.return_value = {"name": "Shop"}
        await cache.fetch_settings()
        mock_transport.fetch.side_effect = StoreAPIError("TIMEOUT", "timed out", 504)

        with pytest.raises(StoreAPIError):
            await cache.fetch_settings()

        assert cache.get_setting("name") == "Shop"

    @pytest.mark.asyncio
    async def test_read_during_fetch_returns_previous_tree(self, cache, mock_transport) -> None:
        """Reads while a refresh is in flight see the previous snapshot."""
        mock_transport.fetch.return_value = {"name": "Old Shop"}
        await cache.fetch_settings()

        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_fetch(resource_type, params=None):
            started.set()
            await release.wait()
            return {"name": "New Shop"}

        mock_transport.fetch.side_effect = slow_fetch
        task = asyncio.create_task(cache.fetch_settings())
        await started.wait()

        assert cache.get_setting("name") == "Old Shop"

        release.set()
        await task
        assert cache.get_setting("name") == "New Shop"

    @pytest.mark.asyncio
    async def test_currency_snapshot(self, cache, mock_transport) -> None:
        assert cache.currency_snapshot() == CurrencySettings()
        mock_transport.fetch.return_value = {"store": {"currency": "EUR"}}
        await cache.fetch_settings()
        assert cache.currency_snapshot().code == "EUR"
        assert cache.currency_snapshot().symbol == "€"


class TestMenus:
    """Tests for the menus slot."""

    def test_menu_before_fetch(self, cache) -> None:
        assert cache.get_menu("header") is None
        assert cache.menus() == []

    @pytest.mark.asyncio
    async def test_menus_keyed_by_id(self, cache, mock_transport) -> None:
        """Menus are looked up by id, from a paged response."""
        mock_transport.fetch.return_value = {
            "results": [
                {"id": "header", "items": [{"name": "Shop"}]},
                {"id": "footer", "items": []},
            ]
        }

        await cache.fetch_menus()

        assert cache.get_menu("header")["items"] == [{"name": "Shop"}]
        assert cache.get_menu("sidebar") is None
        assert [m["id"] for m in cache.menus()] == ["header", "footer"]
        mock_transport.fetch.assert_awaited_once_with("menus")

    @pytest.mark.asyncio
    async def test_menus_plain_list(self, cache, mock_transport) -> None:
        mock_transport.fetch.return_value = [{"id": 1, "name": "Main"}]
        await cache.fetch_menus()
        assert cache.get_menu(1)["name"] == "Main"

    @pytest.mark.asyncio
    async def test_non_mapping_items_skipped(self, cache, mock_transport) -> None:
        mock_transport.fetch.return_value = ["header-id", None, {"id": "footer"}]
        await cache.fetch_menus()
        assert [m["id"] for m in cache.menus()] == ["footer"]


class TestPaymentSettings:
    """Tests for the payment settings slot."""

    @pytest.mark.asyncio
    async def test_payment_settings(self, cache, mock_transport) -> None:
        assert cache.get_payment_settings() is None
        mock_transport.fetch.return_value = {
            "card": {"gateway": "stripe", "publishable_key": "pk_test"}
        }

        await cache.fetch_payment_settings()

        assert cache.get_payment_settings("card.gateway") == "stripe"
        assert cache.get_payment_settings("paypal.enabled", False) is False
        mock_transport.fetch.assert_awaited_once_with("payments")


class TestLoad:
    """Tests for loading every slot at once."""

    @pytest.mark.asyncio
    async def test_load_fetches_all_slots(self, cache, mock_transport) -> None:
        responses = {
            "settings": {"name": "Shop"},
            "menus": [{"id": "header"}],
            "payments": {"card": {"gateway": "stripe"}},
        }

        async def fetch(resource_type, params=None):
            return responses[resource_type]

        mock_transport.fetch.side_effect = fetch

        await cache.load()

        assert cache.get_setting("name") == "Shop"
        assert cache.get_menu("header") == {"id": "header"}
        assert cache.get_payment_settings("card.gateway") == "stripe"
        assert all(cache.is_loaded(slot) for slot in ("settings", "menus", "payments"))
