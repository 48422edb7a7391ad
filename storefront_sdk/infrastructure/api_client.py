"""Store API Client.

Thin HTTP client for the store's frontend API. This module handles
authentication headers, the shopping session token, error handling and
response parsing. Everything here is request forwarding; business rules
live behind the remote API.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
import structlog

from storefront_sdk.domain.exceptions import StoreAPIError
from storefront_sdk.infrastructure.config import SDKSettings

logger = structlog.get_logger()


# Resource types understood by ``StoreAPIClient.fetch``.
RESOURCE_PATHS: dict[str, str] = {
    "settings": "/settings",
    "menus": "/settings/menus",
    "payments": "/settings/payments",
    "products": "/products",
    "categories": "/categories",
}


class Transport(Protocol):
    """What the settings cache and the facade need from a transport."""

    async def fetch(
        self, resource_type: str, params: dict[str, Any] | None = None
    ) -> Any: ...


@dataclass
class APIError:
    """Represents an API error response."""

    error_code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class APIResponse:
    """Represents an API response."""

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error: APIError | None = None

    def unwrap(self) -> Any:
        """Return the response data or raise the error.

        Returns:
            Decoded JSON body.

        Raises:
            StoreAPIError: If the response is an error.
        """
        if self.success:
            return self.data
        error = self.error or APIError(
            error_code="UNKNOWN_ERROR", message="Unknown error", status_code=500
        )
        raise StoreAPIError(
            error_code=error.error_code,
            message=error.message,
            status_code=error.status_code,
            details=error.details,
        )


class StoreAPIClient:
    """HTTP client for the store frontend API.

    Provides ``fetch`` for the settings cache and passthrough methods
    for products, categories, cart, account and subscriptions.
    """

    def __init__(
        self,
        base_url: str,
        public_key: str,
        timeout: float = 30.0,
        session_header: str = "X-Session",
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Store API base URL.
            public_key: Public key for storefront authentication.
            timeout: Request timeout in seconds.
            session_header: Header carrying the shopping session token.
        """
        self.base_url = base_url.rstrip("/")
        self.public_key = public_key
        self.timeout = timeout
        self.session_header = session_header
        self.session_token: str | None = None
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: SDKSettings) -> "StoreAPIClient":
        """Create a client from SDK settings."""
        return cls(
            base_url=settings.store_url,
            public_key=settings.public_key,
            timeout=settings.timeout,
            session_header=settings.session_header,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bearer {self.public_key}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _error_from_response(response: httpx.Response) -> APIError:
        """Build an APIError from an error response.

        Bodies that are not a JSON object (proxy HTML pages, lists) fall
        back to UNKNOWN_ERROR with the raw text as the message.
        """
        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        if not isinstance(error_data, dict):
            return APIError(
                error_code="UNKNOWN_ERROR",
                message=response.text or response.reason_phrase or "Unknown error",
                status_code=response.status_code,
            )

        return APIError(
            error_code=error_data.get("error_code", "UNKNOWN_ERROR"),
            message=error_data.get("message", "Unknown error"),
            status_code=response.status_code,
            details=error_data.get("details", {}),
        )

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> APIResponse:
        """Make an API request.

        Args:
            method: HTTP method.
            path: API endpoint path.
            json: Request body as JSON.
            params: Query parameters.

        Returns:
            APIResponse with success status and data or error.
        """
        client = await self._get_client()

        headers = {}
        if self.session_token:
            headers[self.session_header] = self.session_token

        # Filter out None params
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            logger.debug(
                "Making store API request",
                method=method,
                path=path,
                has_body=json is not None,
            )

            response = await client.request(
                method=method,
                url=path,
                json=json,
                params=params,
                headers=headers,
            )

            session_token = response.headers.get(self.session_header)
            if session_token:
                self.session_token = session_token

            if response.status_code >= 400:
                error = self._error_from_response(response)
                logger.error(
                    "Store API returned an error",
                    path=path,
                    status_code=response.status_code,
                    error_code=error.error_code,
                )
                return APIResponse(success=False, error=error)

            # Handle empty responses (204 No Content)
            if response.status_code == 204:
                return APIResponse(success=True, data=None)

            return APIResponse(success=True, data=response.json())

        except httpx.TimeoutException as e:
            logger.error("Store API request timeout", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="TIMEOUT",
                    message=f"Request timed out: {path}",
                    status_code=504,
                ),
            )
        except httpx.RequestError as e:
            logger.error("Store API request failed", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="REQUEST_ERROR",
                    message=f"Request failed: {str(e)}",
                    status_code=500,
                ),
            )

    async def fetch(
        self, resource_type: str, params: dict[str, Any] | None = None
    ) -> Any:
        """Fetch a resource collection by type.

        Args:
            resource_type: One of ``RESOURCE_PATHS``.
            params: Optional query parameters.

        Returns:
            Decoded JSON body.

        Raises:
            ValueError: If the resource type is unknown.
            StoreAPIError: If the request fails.
        """
        path = RESOURCE_PATHS.get(resource_type)
        if path is None:
            raise ValueError(f"Unknown resource type: {resource_type!r}")
        response = await self._request(method="GET", path=path, params=params)
        return response.unwrap()

    # =========================================================================
    # Product & Category Endpoints
    # =========================================================================

    async def list_products(
        self,
        page: int = 1,
        limit: int = 25,
        category: str | None = None,
        search: str | None = None,
        sort: str | None = None,
    ) -> APIResponse:
        """List products.

        Args:
            page: Page number.
            limit: Items per page.
            category: Optional category id or slug filter.
            search: Optional search query.
            sort: Optional sort expression (e.g., "price desc").

        Returns:
            APIResponse with a page of products.
        """
        return await self._request(
            method="GET",
            path="/products",
            params={
                "page": page,
                "limit": limit,
                "category": category,
                "search": search,
                "sort": sort,
            },
        )

    async def get_product(self, product_id: str) -> APIResponse:
        """Get a product by id or slug.

        Args:
            product_id: Product id or slug.

        Returns:
            APIResponse with product data, including options and variants.
        """
        return await self._request(
            method="GET",
            path=f"/products/{product_id}",
            params={"expand": "variants"},
        )

    async def list_categories(self, page: int = 1, limit: int = 25) -> APIResponse:
        """List categories."""
        return await self._request(
            method="GET",
            path="/categories",
            params={"page": page, "limit": limit},
        )

    async def get_category(self, category_id: str) -> APIResponse:
        """Get a category by id or slug."""
        return await self._request(method="GET", path=f"/categories/{category_id}")

    # =========================================================================
    # Cart Endpoints
    # =========================================================================

    async def get_cart(self) -> APIResponse:
        """Get the cart of the current session."""
        return await self._request(method="GET", path="/cart")

    async def add_cart_item(
        self,
        product_id: str,
        quantity: int = 1,
        options: dict[str, Any] | list[dict[str, Any]] | None = None,
        purchase_option: dict[str, Any] | None = None,
    ) -> APIResponse:
        """Add an item to the session cart.

        Args:
            product_id: Product to add.
            quantity: Quantity to add.
            options: Selected option values, in either selection form.
            purchase_option: Optional purchase option (e.g., a subscription plan).

        Returns:
            APIResponse with the updated cart.
        """
        item: dict[str, Any] = {"product_id": product_id, "quantity": quantity}
        if options is not None:
            item["options"] = options
        if purchase_option is not None:
            item["purchase_option"] = purchase_option
        return await self._request(method="POST", path="/cart/items", json=item)

    async def update_cart_item(
        self,
        item_id: str,
        quantity: int | None = None,
        options: dict[str, Any] | list[dict[str, Any]] | None = None,
    ) -> APIResponse:
        """Update a cart item's quantity or options."""
        body = {
            k: v
            for k, v in {"quantity": quantity, "options": options}.items()
            if v is not None
        }
        return await self._request(
            method="PUT", path=f"/cart/items/{item_id}", json=body
        )

    async def remove_cart_item(self, item_id: str) -> APIResponse:
        """Remove an item from the session cart."""
        return await self._request(method="DELETE", path=f"/cart/items/{item_id}")

    async def apply_coupon(self, code: str) -> APIResponse:
        """Apply a coupon code to the session cart."""
        return await self._request(
            method="PUT", path="/cart", json={"coupon_code": code}
        )

    # =========================================================================
    # Account Endpoints
    # =========================================================================

    async def login(self, email: str, password: str) -> APIResponse:
        """Log the session in to a customer account."""
        return await self._request(
            method="POST",
            path="/account/login",
            json={"email": email, "password": password},
        )

    async def logout(self) -> APIResponse:
        """Log the session out."""
        return await self._request(method="POST", path="/account/logout")

    async def get_account(self) -> APIResponse:
        """Get the logged-in customer account."""
        return await self._request(method="GET", path="/account")

    # =========================================================================
    # Subscription Endpoints
    # =========================================================================

    async def list_subscriptions(self, page: int = 1, limit: int = 25) -> APIResponse:
        """List the logged-in customer's subscriptions."""
        return await self._request(
            method="GET",
            path="/subscriptions",
            params={"page": page, "limit": limit},
        )

    async def get_subscription(self, subscription_id: str) -> APIResponse:
        """Get one of the logged-in customer's subscriptions."""
        return await self._request(
            method="GET", path=f"/subscriptions/{subscription_id}"
        )
