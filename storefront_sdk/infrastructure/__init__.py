"""Infrastructure layer - configuration, logging and the store API client."""

from storefront_sdk.infrastructure.api_client import (
    RESOURCE_PATHS,
    APIError,
    APIResponse,
    StoreAPIClient,
    Transport,
)
from storefront_sdk.infrastructure.config import SDKSettings
from storefront_sdk.infrastructure.logging import configure_logging

__all__ = [
    "RESOURCE_PATHS",
    "APIError",
    "APIResponse",
    "SDKSettings",
    "StoreAPIClient",
    "Transport",
    "configure_logging",
]
