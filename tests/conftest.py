"""Pytest configuration and fixtures for storefront SDK tests."""

import copy
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront_sdk.infrastructure.api_client import APIError, APIResponse, StoreAPIClient

SHIRT: dict[str, Any] = {
    "id": "prod-shirt",
    "slug": "oxford-shirt",
    "name": "Oxford Shirt",
    "price": 30,
    "orig_price": 45,
    "stock_tracking": True,
    "stock_status": "in_stock",
    "stock_level": 10,
    "options": [
        {
            "id": "opt-size",
            "name": "Size",
            "input_type": "select",
            "variant": True,
            "values": [
                {"id": "val-small", "name": "Small"},
                {"id": "val-medium", "name": "Medium"},
            ],
        },
        {
            "id": "opt-color",
            "name": "Color",
            "input_type": "select",
            "variant": True,
            "values": [
                {"id": "val-blue", "name": "Blue"},
                {"id": "val-red", "name": "Red"},
            ],
        },
        {
            "id": "opt-fit",
            "name": "Fit",
            "input_type": "select",
            "variant": False,
            "values": [
                {"id": "val-standard", "name": "Standard"},
                {"id": "val-tailored", "name": "Tailored", "price": 15},
                {"id": "val-limited", "name": "Limited", "stock_status": "out_of_stock"},
            ],
        },
        {
            "id": "opt-wrap",
            "name": "Gift Wrap",
            "input_type": "toggle",
            "variant": False,
            "values": [{"id": "val-wrap", "name": "Yes", "price": 4.5}],
        },
        {
            "id": "opt-extras",
            "name": "Extras",
            "input_type": "multi_select",
            "variant": False,
            "values": [
                {"id": "val-pocket", "name": "Pocket", "price": 2},
                {"id": "val-monogram", "name": "Monogram", "price": 6},
            ],
        },
        {
            "id": "opt-note",
            "name": "Note",
            "input_type": "text",
            "variant": False,
        },
    ],
    "variants": {
        "results": [
            {
                "id": "var-medium-blue",
                "option_value_ids": ["val-medium", "val-blue"],
                "price": 40,
                "stock_status": "in_stock",
                "stock_level": 3,
            },
            {
                "id": "var-small-red",
                "option_value_ids": ["val-small", "val-red"],
                "price": 35,
                "sale_price": 28,
                "stock_status": "backorder",
                "stock_level": 0,
            },
        ]
    },
    "purchase_options": {
        "standard": {"price": 30},
        "subscription": {
            "plans": [
                {
                    "id": "plan-monthly",
                    "name": "Monthly",
                    "price": 27,
                    "billing_schedule": {"interval": "monthly", "interval_count": 1},
                },
                {"id": "plan-yearly", "name": "Yearly", "price": 300},
            ]
        },
    },
}


@pytest.fixture
def product() -> dict[str, Any]:
    """A shirt with variant options, non-variant options and two variants."""
    return copy.deepcopy(SHIRT)


@pytest.fixture
def plain_product() -> dict[str, Any]:
    """A product without options."""
    return {
        "id": "prod-mug",
        "slug": "mug",
        "name": "Mug",
        "price": 12,
        "stock_status": "in_stock",
        "options": [],
    }


@pytest.fixture
def make_response() -> Callable[..., APIResponse]:
    """Factory for API responses."""

    def _make(
        data: Any = None,
        error_code: str | None = None,
        message: str = "",
        status_code: int = 400,
    ) -> APIResponse:
        if error_code is None:
            return APIResponse(success=True, data=data)
        return APIResponse(
            success=False,
            error=APIError(
                error_code=error_code,
                message=message,
                status_code=status_code,
            ),
        )

    return _make


@pytest.fixture
def mock_transport() -> MagicMock:
    """Create a mock transport with an async ``fetch``."""
    transport = MagicMock(spec=StoreAPIClient)
    transport.fetch = AsyncMock()
    return transport


@pytest.fixture
def mock_http_response() -> Callable[..., MagicMock]:
    """Factory for mocked httpx responses."""

    def _make(
        status_code: int = 200,
        json_data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data
        response.headers = headers or {}
        return response

    return _make
