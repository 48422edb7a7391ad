"""SDK exceptions.

Errors raised by the SDK itself. Lenient conditions (unknown selection
entries, no variant match, reading the settings cache before a fetch)
are not errors and never raise.
"""

from typing import Any


class StorefrontError(Exception):
    """Base class for all SDK exceptions.

    Callers can catch this to handle any failure coming out of the SDK.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize SDK error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Transport Errors
# ============================================================================


class StoreAPIError(StorefrontError):
    """Raised when a call to the remote store API fails.

    Carries the server error code and HTTP status so callers can decide
    how to react. The SDK never retries; it propagates this unchanged.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize store API error.

        Args:
            error_code: Machine-readable error code (e.g., "NOT_FOUND", "TIMEOUT").
            message: Human-readable error message.
            status_code: HTTP status code of the failed call.
            details: Optional error details returned by the server.
        """
        super().__init__(message, details=details)
        self.error_code = error_code
        self.status_code = status_code

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message} (status {self.status_code})"


# ============================================================================
# Catalog Errors
# ============================================================================


class CatalogError(StorefrontError):
    """Base class for catalog-related errors."""

    pass


class InvalidProductError(CatalogError):
    """Raised when a variation is requested for something that is not a product."""

    def __init__(self, received: Any) -> None:
        """Initialize invalid product error.

        Args:
            received: The value passed in place of a product.
        """
        type_name = type(received).__name__
        super().__init__(
            f"Expected a product mapping, got {type_name}",
            details={"received_type": type_name},
        )
