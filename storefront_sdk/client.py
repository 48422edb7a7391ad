"""Storefront session.

Wires one store API client, its settings cache and a variation engine
together. Multiple ``Storefront`` instances in one process are fully
independent.
"""

from typing import Any, Mapping

import structlog

from storefront_sdk.catalog.engine import VariationEngine
from storefront_sdk.infrastructure.api_client import StoreAPIClient
from storefront_sdk.infrastructure.config import SDKSettings
from storefront_sdk.settings.cache import SettingsCache

logger = structlog.get_logger()


class Storefront:
    """One store session.

    Example:
        async with Storefront(SDKSettings(store_url=..., public_key=...)) as store:
            await store.settings.load()
            shirt = await store.get_product_variation("shirt", {"Size": "M"})
    """

    def __init__(
        self,
        config: SDKSettings | None = None,
        api: StoreAPIClient | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            config: SDK settings; read from the environment when omitted.
            api: Pre-built API client, mainly for tests.
        """
        self.config = config or SDKSettings()
        self.api = api or StoreAPIClient.from_settings(self.config)
        self.settings = SettingsCache(self.api)
        self.variations = VariationEngine(settings_cache=self.settings)

    async def __aenter__(self) -> "Storefront":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.api.close()

    def variation(
        self,
        product: Mapping[str, Any],
        selection: Any = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Compute a variation using this session's currency settings."""
        return self.variations.variation(product, selection, **kwargs)

    async def get_product_variation(
        self,
        product_id: str,
        selection: Any = None,
        purchase_option: str | Mapping[str, Any] | None = None,
        format_prices: bool = False,
    ) -> dict[str, Any]:
        """Fetch a product and compute its variation for a selection.

        Args:
            product_id: Product id or slug.
            selection: Option selection in either form.
            purchase_option: Optional purchase option.
            format_prices: Add formatted price strings.

        Returns:
            The product variation.

        Raises:
            StoreAPIError: If the product could not be fetched.
        """
        product = (await self.api.get_product(product_id)).unwrap()
        logger.debug("Fetched product for variation", product_id=product_id)
        return self.variations.variation(
            product,
            selection,
            purchase_option=purchase_option,
            format_prices=format_prices,
        )
