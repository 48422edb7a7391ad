"""Store settings cache.

Holds the store settings, navigation menus and payment settings for one
store session. Each slot is fetched asynchronously through the transport
and replaced wholesale; reads are synchronous and never raise.
"""

import asyncio
from typing import Any, Mapping

import structlog

from storefront_sdk.catalog.pricing import CurrencySettings
from storefront_sdk.catalog.schemas import results_list
from storefront_sdk.infrastructure.api_client import Transport

logger = structlog.get_logger()

SETTINGS = "settings"
MENUS = "menus"
PAYMENTS = "payments"


def resolve_path(tree: Any, path: str | None, default: Any = None) -> Any:
    """Resolve a dot-delimited path against a JSON tree.

    Numeric segments index into lists. A stored ``None`` is returned as is.

    Args:
        tree: Decoded JSON tree.
        path: Path such as "colors.primary.dark"; empty returns the tree.
        default: Value returned when any segment is missing.

    Returns:
        The value at ``path`` or ``default``.
    """
    if not path:
        return tree
    current = tree
    for segment in path.split("."):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        elif (
            isinstance(current, list)
            and segment.isdigit()
            and int(segment) < len(current)
        ):
            current = current[int(segment)]
        else:
            return default
    return current


class SettingsCache:
    """Cache of store settings, menus and payment settings.

    One instance belongs to one store session; create it with the session's
    transport, fetch, then read.

    Example:
        cache = SettingsCache(client)
        await cache.load()
        cache.get_setting("colors.primary.dark", "#000")
    """

    def __init__(self, transport: Transport) -> None:
        """Initialize an empty cache.

        Args:
            transport: Transport used to fetch the cached resources.
        """
        self._transport = transport
        self._settings: dict[str, Any] | None = None
        self._menus: dict[str, dict[str, Any]] | None = None
        self._payments: dict[str, Any] | None = None

    def is_loaded(self, slot: str = SETTINGS) -> bool:
        """Check whether a slot has completed at least one fetch.

        Args:
            slot: One of "settings", "menus" or "payments".
        """
        return {
            SETTINGS: self._settings,
            MENUS: self._menus,
            PAYMENTS: self._payments,
        }[slot] is not None

    # =========================================================================
    # Fetching
    # =========================================================================

    async def fetch_settings(self) -> dict[str, Any]:
        """Fetch the settings tree and replace the cached one.

        Returns:
            The new settings tree.

        Raises:
            StoreAPIError: If the transport fails; the previous tree is kept.
        """
        data = await self._transport.fetch(SETTINGS)
        settings = dict(data or {})
        self._settings = settings
        logger.info("Settings cache refreshed", slot=SETTINGS, keys=len(settings))
        return settings

    async def fetch_menus(self) -> dict[str, dict[str, Any]]:
        """Fetch the navigation menus and replace the cached ones.

        Returns:
            Menus keyed by menu id.

        Raises:
            StoreAPIError: If the transport fails; the previous menus are kept.
        """
        data = await self._transport.fetch(MENUS)
        menus = {
            str(menu["id"]): menu
            for menu in results_list(data)
            if isinstance(menu, Mapping) and "id" in menu
        }
        self._menus = menus
        logger.info("Settings cache refreshed", slot=MENUS, count=len(menus))
        return menus

    async def fetch_payment_settings(self) -> dict[str, Any]:
        """Fetch the payment settings and replace the cached ones.

        Returns:
            The new payment settings tree.

        Raises:
            StoreAPIError: If the transport fails; the previous tree is kept.
        """
        data = await self._transport.fetch(PAYMENTS)
        payments = dict(data or {})
        self._payments = payments
        logger.info("Settings cache refreshed", slot=PAYMENTS, keys=len(payments))
        return payments

    async def load(self) -> None:
        """Fetch settings, menus and payment settings concurrently."""
        await asyncio.gather(
            self.fetch_settings(),
            self.fetch_menus(),
            self.fetch_payment_settings(),
        )

    # =========================================================================
    # Reading
    # =========================================================================

    def get_setting(self, path: str | None = None, default: Any = None) -> Any:
        """Look up a setting by dotted path.

        Args:
            path: Dot-delimited path; empty returns the whole tree.
            default: Value returned when the path is missing or nothing
                has been fetched yet.
        """
        if self._settings is None:
            return default
        return resolve_path(self._settings, path, default)

    def get_menu(self, menu_id: str) -> dict[str, Any] | None:
        """Look up a navigation menu by id.

        Returns:
            The menu, or None if absent or not fetched yet.
        """
        if self._menus is None:
            return None
        return self._menus.get(str(menu_id))

    def menus(self) -> list[dict[str, Any]]:
        """List all cached menus in fetch order."""
        return list((self._menus or {}).values())

    def get_payment_settings(
        self, path: str | None = None, default: Any = None
    ) -> Any:
        """Look up payment settings, optionally by dotted path.

        Payment widget loaders read this to know which gateways are
        enabled and their public identifiers.
        """
        if self._payments is None:
            return default
        return resolve_path(self._payments, path, default)

    def currency_snapshot(self) -> CurrencySettings:
        """Currency display rules from the current settings snapshot."""
        return CurrencySettings.from_settings(self.get_setting("store"))
