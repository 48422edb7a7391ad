"""Attribute merging.

Builds the composite product for a selection. For each price field the
matched variant's own value wins, then the purchase option's, then the
base product's; non-variant option price deltas are added on top. Stock
status is the most restrictive of the base (or variant) status and every
selected non-variant option override.
"""

from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence

from storefront_sdk.catalog.matcher import VariantMatch
from storefront_sdk.catalog.purchase import PurchaseSelection
from storefront_sdk.catalog.resolver import ResolvedOption
from storefront_sdk.catalog.schemas import to_decimal, to_number

PRICE_FIELDS = ("price", "sale_price", "orig_price")

# Least to most restrictive. Unknown statuses rank with "in_stock".
STOCK_STATUS_RANK: dict[str, int] = {
    "in_stock": 0,
    "available": 0,
    "preorder": 1,
    "backorder": 2,
    "discontinued": 3,
    "out_of_stock": 4,
}


def most_restrictive(statuses: Iterable[str | None]) -> str | None:
    """Pick the most restrictive stock status; earlier ones win ties."""
    result: str | None = None
    for status in statuses:
        if status is None:
            continue
        if result is None or STOCK_STATUS_RANK.get(status, 0) > STOCK_STATUS_RANK.get(
            result, 0
        ):
            result = status
    return result


def merge_attributes(
    product: Mapping[str, Any],
    resolved: Sequence[ResolvedOption],
    match: VariantMatch,
    purchase: PurchaseSelection | None = None,
) -> dict[str, Any]:
    """Merge product, variant, purchase option and option deltas.

    Args:
        product: Base product mapping; never modified.
        resolved: Resolved selection in option declaration order.
        match: Variant match for the selection.
        purchase: Applied purchase option, if one was requested.

    Returns:
        Shallow copy of the product with prices, stock and the applied
        selection overwritten.
    """
    result = dict(product)
    variant = match.variant

    delta = sum(
        (r.price for r in resolved if not r.variant and r.price is not None),
        Decimal(0),
    )

    for field in PRICE_FIELDS:
        value = to_decimal(product.get(field))
        if purchase is not None and purchase.prices is not None:
            override = getattr(purchase.prices, field)
            if override is not None:
                value = override
        if variant is not None and getattr(variant, field) is not None:
            value = getattr(variant, field)

        if value is None and field == "price" and delta:
            value = Decimal(0)
        if value is not None and delta:
            value += delta

        if value is not None or field in product:
            result[field] = to_number(value)

    status = product.get("stock_status")
    if variant is not None and variant.stock_status is not None:
        status = variant.stock_status
    overrides = [r.stock_status for r in resolved if not r.variant and r.stock_status]
    if overrides:
        status = most_restrictive([status, *overrides])
    if status is not None or "stock_status" in product:
        result["stock_status"] = status

    if (
        product.get("stock_tracking")
        and variant is not None
        and variant.stock_level is not None
    ):
        result["stock_level"] = variant.stock_level

    result["options"] = [r.to_dict() for r in resolved]
    result["variant_id"] = variant.id if variant is not None else None
    if purchase is not None:
        result["purchase_option"] = purchase.to_dict()
    return result
