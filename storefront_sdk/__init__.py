"""Storefront SDK.

Client-side toolkit for storefront applications:

- Product variations: the purchasable price and stock of a product for a
  customer's option selection
- Store settings, navigation menus and payment settings cache
- Thin API client for products, categories, cart, account and subscriptions

Example:
    from storefront_sdk import Storefront, variation

    shirt = variation(product, {"Size": "Medium", "Color": "Blue"})
"""

from storefront_sdk.catalog import VariationEngine, variation
from storefront_sdk.client import Storefront
from storefront_sdk.domain.exceptions import (
    InvalidProductError,
    StoreAPIError,
    StorefrontError,
)
from storefront_sdk.infrastructure import SDKSettings, StoreAPIClient, configure_logging
from storefront_sdk.settings import SettingsCache

__version__ = "0.1.0"

__all__ = [
    "InvalidProductError",
    "SDKSettings",
    "SettingsCache",
    "StoreAPIClient",
    "StoreAPIError",
    "Storefront",
    "StorefrontError",
    "VariationEngine",
    "configure_logging",
    "variation",
]
