"""Variant matching.

Finds the variant whose option value combination is exactly the
customer's selection on variant options. A partial selection never
matches, so browsing state cannot surface the price of a variant the
customer has not fully chosen.
"""

from dataclasses import dataclass
from typing import Sequence

import structlog

from storefront_sdk.catalog.resolver import ResolvedOption
from storefront_sdk.catalog.schemas import ProductOption, ProductVariant
from storefront_sdk.domain.base import ValueObject

logger = structlog.get_logger()


@dataclass(frozen=True)
class VariantMatch(ValueObject):
    """Outcome of matching a selection against a product's variants.

    Attributes:
        variant: The matched variant, or None.
        candidates: Ids of every variant that matched exactly. More than one
            means the product data declares duplicate combinations.
        complete: Whether every variant option of the product was selected.
    """

    variant: ProductVariant | None = None
    candidates: tuple[str | None, ...] = ()
    complete: bool = False

    @property
    def matched(self) -> bool:
        return self.variant is not None

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1


def match_variant(
    options: Sequence[ProductOption],
    resolved: Sequence[ResolvedOption],
    variants: Sequence[ProductVariant],
    product_id: str | None = None,
) -> VariantMatch:
    """Match resolved variant-option values to a variant.

    Args:
        options: The product's options.
        resolved: Resolved selection.
        variants: The product's variants, in list order.
        product_id: Product id, for logging only.

    Returns:
        VariantMatch; when several variants match, the first in list order
        is returned and the match is flagged ambiguous.
    """
    variant_options = {option.key for option in options if option.variant}
    variant_selection = [r for r in resolved if r.variant and r.value_id is not None]
    selected_ids = {r.value_id for r in variant_selection}
    complete = bool(variant_options) and variant_options <= {
        r.option_key for r in variant_selection
    }

    if not selected_ids:
        return VariantMatch(complete=complete)

    matches = [
        variant
        for variant in variants
        if variant.option_value_ids and set(variant.option_value_ids) == selected_ids
    ]
    if not matches:
        return VariantMatch(complete=complete)

    candidates = tuple(variant.id for variant in matches)
    if len(matches) > 1:
        logger.warning(
            "Ambiguous variant match",
            product_id=product_id,
            variant_ids=list(candidates),
            option_value_ids=sorted(selected_ids),
        )
    return VariantMatch(variant=matches[0], candidates=candidates, complete=complete)
