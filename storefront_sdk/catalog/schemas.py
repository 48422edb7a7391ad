"""Catalog schemas.

Pydantic views over the product JSON returned by the store API. Only the
keys the variation engine reads are modelled; everything else passes
through untouched on the product mapping itself.
"""

from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

FREE_FORM_INPUT_TYPES = frozenset({"text", "long_text", "textarea"})


def to_decimal(value: Any) -> Decimal | None:
    """Convert a JSON number (or numeric string) to Decimal."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_number(value: Decimal | None) -> int | float | None:
    """Convert a Decimal back to a JSON-friendly number."""
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _to_id(value: Any) -> str | None:
    return None if value is None else str(value)


def _to_name(value: Any) -> str:
    return "" if value is None else str(value)


class CatalogModel(BaseModel):
    """Base for catalog views: immutable, unknown keys kept."""

    model_config = ConfigDict(extra="allow", frozen=True)


class PriceFields(CatalogModel):
    """Price fields shared by variants and purchase options."""

    price: Decimal | None = None
    sale_price: Decimal | None = None
    orig_price: Decimal | None = None

    @field_validator("price", "sale_price", "orig_price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Decimal | None:
        return to_decimal(value)


class OptionValue(CatalogModel):
    """One concrete choice of a product option.

    Attributes:
        id: Value id, unique within its option.
        name: Display name, unique within its option.
        price: Price delta added when selected on a non-variant option.
        stock_status: Stock status override applied when selected.
    """

    id: str | None = None
    name: str = ""
    price: Decimal | None = None
    stock_status: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str | None:
        return _to_id(value)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> str:
        return _to_name(value)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Decimal | None:
        return to_decimal(value)


class ProductOption(CatalogModel):
    """A configurable attribute of a product (e.g., Size, Color).

    Attributes:
        id: Option id.
        name: Display label, also accepted as a lookup key.
        input_type: How the option is picked ("select", "multi_select",
            "toggle", "text", ...).
        variant: Whether the option participates in variant matching.
        values: Ordered option values.
    """

    id: str | None = None
    name: str = ""
    input_type: str = "select"
    variant: bool = False
    values: list[OptionValue] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str | None:
        return _to_id(value)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> str:
        return _to_name(value)

    @field_validator("variant", mode="before")
    @classmethod
    def coerce_variant(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("input_type", mode="before")
    @classmethod
    def default_input_type(cls, value: Any) -> str:
        return value or "select"

    @field_validator("values", mode="before")
    @classmethod
    def default_values(cls, value: Any) -> Any:
        return value or []

    @property
    def key(self) -> str:
        """Identity used to tell options apart; id when present, else name."""
        return self.id if self.id is not None else self.name

    @property
    def is_free_form(self) -> bool:
        """Whether the option takes arbitrary input instead of a value list."""
        return self.input_type in FREE_FORM_INPUT_TYPES or not self.values


class ProductVariant(PriceFields):
    """A pre-priced combination of variant option values."""

    id: str | None = None
    name: str | None = None
    option_value_ids: list[str] = Field(default_factory=list)
    stock_status: str | None = None
    stock_level: int | float | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str | None:
        return _to_id(value)

    @field_validator("option_value_ids", mode="before")
    @classmethod
    def coerce_value_ids(cls, value: Any) -> list[str]:
        return [str(v) for v in value or []]


class SubscriptionPlan(PriceFields):
    """A subscription plan offered as a purchase option."""

    id: str | None = None
    name: str = ""
    billing_schedule: dict[str, Any] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str | None:
        return _to_id(value)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> str:
        return _to_name(value)


class SubscriptionPurchase(CatalogModel):
    plans: list[SubscriptionPlan] = Field(default_factory=list)


class PurchaseOptions(CatalogModel):
    """Standard and subscription pricing of a product."""

    standard: PriceFields | None = None
    subscription: SubscriptionPurchase | None = None


def results_list(data: Any) -> list[Any]:
    """Unwrap a paged ``{"results": [...]}`` body into a list."""
    if isinstance(data, Mapping):
        return list(data.get("results") or [])
    return list(data or [])


def parse_options(product: Mapping[str, Any]) -> list[ProductOption]:
    """Parse a product's options in declaration order."""
    return [ProductOption.model_validate(o) for o in product.get("options") or []]


def parse_variants(product: Mapping[str, Any]) -> list[ProductVariant]:
    """Parse a product's variants.

    Accepts both a plain list and the paged ``{"results": [...]}`` shape.
    """
    return [ProductVariant.model_validate(v) for v in results_list(product.get("variants"))]


def parse_purchase_options(product: Mapping[str, Any]) -> PurchaseOptions:
    """Parse a product's purchase options; empty when none are defined."""
    return PurchaseOptions.model_validate(product.get("purchase_options") or {})
