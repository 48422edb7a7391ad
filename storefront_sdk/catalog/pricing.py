"""Price formatting.

Turns the numeric prices produced by the variation engine into display
strings. The engine itself never formats; callers opt in and the currency
rules come from a snapshot of the store settings.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping

from storefront_sdk.domain.base import ValueObject

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "CAD": "$",
    "AUD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}


@dataclass(frozen=True)
class CurrencySettings(ValueObject):
    """Currency display rules for one store.

    Attributes:
        code: ISO 4217 currency code.
        symbol: Symbol printed next to the amount.
        decimals: Number of decimal places to round and print.
        thousands_separator: Grouping separator.
        decimal_separator: Separator between whole and fractional parts.
        symbol_after: Print the symbol after the amount instead of before.
    """

    code: str = "USD"
    symbol: str = "$"
    decimals: int = 2
    thousands_separator: str = ","
    decimal_separator: str = "."
    symbol_after: bool = False

    @classmethod
    def from_settings(cls, store: Mapping[str, Any] | None) -> "CurrencySettings":
        """Build currency rules from the ``store`` section of the settings tree.

        The store's base currency is ``store.currency``; per-currency overrides
        come from the matching entry of ``store.currencies``.

        Args:
            store: The ``store`` settings mapping, or None before a fetch.

        Returns:
            CurrencySettings, USD defaults when nothing is configured.
        """
        if not isinstance(store, Mapping) or not store:
            return cls()
        code = str(store.get("currency") or "USD").upper()
        entry: Mapping[str, Any] = {}
        for candidate in store.get("currencies") or []:
            if not isinstance(candidate, Mapping):
                continue
            if str(candidate.get("code", "")).upper() == code:
                entry = candidate
                break

        decimals = entry.get("decimals")
        return cls(
            code=code,
            symbol=entry.get("symbol") or CURRENCY_SYMBOLS.get(code, code),
            decimals=int(decimals) if decimals is not None else 2,
            thousands_separator=entry.get("thousands_separator", ","),
            decimal_separator=entry.get("decimal_separator", "."),
            symbol_after=entry.get("symbol_position") == "after",
        )


def format_price(amount: int | float | Decimal, currency: CurrencySettings) -> str:
    """Format an amount for display.

    Args:
        amount: Amount in major currency units.
        currency: Currency display rules.

    Returns:
        Display string such as "$1,234.50" or "12,50 €".
    """
    quantum = Decimal(1).scaleb(-currency.decimals)
    value = Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):f}".partition(".")

    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)
    number = currency.thousands_separator.join(groups)
    if fraction:
        number = f"{number}{currency.decimal_separator}{fraction}"

    if currency.symbol_after:
        return f"{sign}{number} {currency.symbol}"
    return f"{sign}{currency.symbol}{number}"
