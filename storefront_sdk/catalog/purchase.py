"""Purchase option resolution.

A product can be bought once ("standard") or on a subscription plan. The
chosen purchase option supplies its own prices, which sit between the
base product and a matched variant.
"""

from dataclasses import dataclass
from typing import Any, Mapping

import structlog

from storefront_sdk.catalog.resolver import resolve_by_id_then_name
from storefront_sdk.catalog.schemas import (
    PriceFields,
    SubscriptionPlan,
    parse_purchase_options,
)
from storefront_sdk.domain.base import ValueObject

logger = structlog.get_logger()

STANDARD = "standard"
SUBSCRIPTION = "subscription"


@dataclass(frozen=True)
class PurchaseSelection(ValueObject):
    """The purchase option applied to a variation.

    Attributes:
        type: "standard" or "subscription".
        prices: Price fields of the option or plan, if it defines any.
        plan: The subscription plan, for subscriptions.
    """

    type: str
    prices: PriceFields | None = None
    plan: SubscriptionPlan | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.plan is not None:
            data["plan_id"] = self.plan.id
            data["plan_name"] = self.plan.name
            if self.plan.billing_schedule is not None:
                data["billing_schedule"] = dict(self.plan.billing_schedule)
        return data


def resolve_purchase_option(
    product: Mapping[str, Any], requested: str | Mapping[str, Any]
) -> PurchaseSelection:
    """Resolve a requested purchase option against the product.

    Args:
        product: Product mapping.
        requested: "standard", "subscription", or a mapping with ``type`` and
            an optional ``plan_id`` / ``plan`` (id or name).

    Returns:
        The purchase selection. A subscription request on a product without
        plans, or naming an unknown plan, falls back to standard.
    """
    if isinstance(requested, Mapping):
        kind = str(requested.get("type") or STANDARD)
        plan_token = requested.get("plan_id", requested.get("plan"))
    else:
        kind = str(requested)
        plan_token = None

    options = parse_purchase_options(product)

    if kind == SUBSCRIPTION:
        plans = options.subscription.plans if options.subscription else []
        if plan_token is None:
            plan = plans[0] if plans else None
        else:
            plan = resolve_by_id_then_name(plans, plan_token)
        if plan is not None:
            return PurchaseSelection(type=SUBSCRIPTION, prices=plan, plan=plan)
        logger.debug(
            "Subscription plan not available, using standard purchase",
            product_id=product.get("id"),
            plan=plan_token,
        )

    return PurchaseSelection(type=STANDARD, prices=options.standard)
