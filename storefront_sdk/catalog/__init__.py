"""Product catalog - option selection and variation resolution.

- **Selection**: caller input as a ListForm or MapForm
- **Resolver**: maps entries onto options and values by id, then name
- **Matcher**: finds the variant that exactly matches the variant options
- **Merger**: combines product, variant, purchase option and option deltas
- **VariationEngine**: runs the three steps for one product
"""

from storefront_sdk.catalog.matcher import VariantMatch, match_variant
from storefront_sdk.catalog.merger import (
    PRICE_FIELDS,
    STOCK_STATUS_RANK,
    merge_attributes,
    most_restrictive,
)
from storefront_sdk.catalog.pricing import CurrencySettings, format_price
from storefront_sdk.catalog.purchase import PurchaseSelection, resolve_purchase_option
from storefront_sdk.catalog.resolver import (
    ResolvedOption,
    resolve_by_id_then_name,
    resolve_selection,
)
from storefront_sdk.catalog.schemas import (
    OptionValue,
    ProductOption,
    ProductVariant,
    PurchaseOptions,
    SubscriptionPlan,
)
from storefront_sdk.catalog.selection import (
    ListForm,
    MapForm,
    Selection,
    SelectionEntry,
    normalize_selection,
    to_selection,
)
from storefront_sdk.catalog.engine import VariationEngine, variation

__all__ = [
    # Selection
    "ListForm",
    "MapForm",
    "Selection",
    "SelectionEntry",
    "normalize_selection",
    "to_selection",
    # Schemas
    "OptionValue",
    "ProductOption",
    "ProductVariant",
    "PurchaseOptions",
    "SubscriptionPlan",
    # Resolution
    "ResolvedOption",
    "resolve_by_id_then_name",
    "resolve_selection",
    # Matching
    "VariantMatch",
    "match_variant",
    # Merging
    "PRICE_FIELDS",
    "STOCK_STATUS_RANK",
    "PurchaseSelection",
    "merge_attributes",
    "most_restrictive",
    "resolve_purchase_option",
    # Engine
    "VariationEngine",
    "variation",
    # Pricing
    "CurrencySettings",
    "format_price",
]
