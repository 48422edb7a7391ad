"""Domain layer - value object base and SDK exceptions."""

from storefront_sdk.domain.base import ValueObject
from storefront_sdk.domain.exceptions import (
    CatalogError,
    InvalidProductError,
    StoreAPIError,
    StorefrontError,
)

__all__ = [
    "ValueObject",
    "StorefrontError",
    "StoreAPIError",
    "CatalogError",
    "InvalidProductError",
]
