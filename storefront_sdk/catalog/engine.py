"""Product variation engine.

``VariationEngine.variation`` computes the purchasable view of a product
for a customer's option selection: resolve the selection, match a
variant, merge attributes. It is pure and synchronous; the settings cache
is only consulted to format prices when asked to.
"""

from typing import TYPE_CHECKING, Any, Callable, Mapping

import structlog

from storefront_sdk.catalog.matcher import match_variant
from storefront_sdk.catalog.merger import PRICE_FIELDS, merge_attributes
from storefront_sdk.catalog.pricing import CurrencySettings, format_price
from storefront_sdk.catalog.purchase import resolve_purchase_option
from storefront_sdk.catalog.resolver import resolve_selection
from storefront_sdk.catalog.schemas import parse_options, parse_variants
from storefront_sdk.domain.exceptions import InvalidProductError

if TYPE_CHECKING:
    from storefront_sdk.settings.cache import SettingsCache

logger = structlog.get_logger()

PriceFormatter = Callable[[Any, CurrencySettings], str]


class VariationEngine:
    """Computes product variations.

    Example:
        engine = VariationEngine(settings_cache=cache)
        shirt = engine.variation(product, {"Size": "Medium", "Color": "Blue"})
        shirt["price"], shirt["variant_id"]
    """

    def __init__(
        self,
        settings_cache: "SettingsCache | None" = None,
        formatter: PriceFormatter = format_price,
    ) -> None:
        """Initialize the engine.

        Args:
            settings_cache: Source of currency rules for formatted prices.
            formatter: Turns an amount and currency rules into a display string.
        """
        self._settings_cache = settings_cache
        self._formatter = formatter

    def variation(
        self,
        product: Mapping[str, Any],
        selection: Any = None,
        *,
        purchase_option: str | Mapping[str, Any] | None = None,
        format_prices: bool = False,
    ) -> dict[str, Any]:
        """Compute the variation of a product for a selection.

        Args:
            product: Product mapping as returned by the store API.
            selection: List of ``{"id"|"name", "value"}`` entries, a mapping of
                option id/name to value id/name, or None.
            purchase_option: Optional "standard", "subscription" or
                ``{"type": ..., "plan_id": ...}``.
            format_prices: Add ``<field>_formatted`` display strings.

        Returns:
            A new product mapping. Without options it is a plain copy of the
            product; otherwise prices, stock, ``options`` and ``variant_id``
            reflect the selection.

        Raises:
            InvalidProductError: If ``product`` is not a mapping.
        """
        if not isinstance(product, Mapping):
            raise InvalidProductError(product)

        options = parse_options(product)
        if not options and purchase_option is None:
            result = dict(product)
        else:
            resolved = resolve_selection(options, selection)
            match = match_variant(
                options,
                resolved,
                parse_variants(product),
                product_id=product.get("id"),
            )
            purchase = (
                resolve_purchase_option(product, purchase_option)
                if purchase_option is not None
                else None
            )
            result = merge_attributes(product, resolved, match, purchase)
            logger.debug(
                "Computed product variation",
                product_id=product.get("id"),
                variant_id=result["variant_id"],
                selected=len(resolved),
                complete=match.complete,
            )

        if format_prices:
            self._add_formatted_prices(result)
        return result

    def _add_formatted_prices(self, result: dict[str, Any]) -> None:
        if self._settings_cache is not None:
            currency = self._settings_cache.currency_snapshot()
        else:
            currency = CurrencySettings()
        for field in PRICE_FIELDS:
            if result.get(field) is not None:
                result[f"{field}_formatted"] = self._formatter(result[field], currency)


_default_engine = VariationEngine()


def variation(
    product: Mapping[str, Any], selection: Any = None, **kwargs: Any
) -> dict[str, Any]:
    """Compute a variation with an engine that has no settings cache."""
    return _default_engine.variation(product, selection, **kwargs)
