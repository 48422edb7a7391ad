"""Option value resolution.

Maps a caller's selection onto a product's declared options. Options and
option values are both looked up by id first, then by exact name, through
``resolve_by_id_then_name``.

Unknown options and unknown values are dropped rather than failing the
whole variation; this leniency is intentional and logged at debug level.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol, Sequence, TypeVar

import structlog

from storefront_sdk.catalog.schemas import OptionValue, ProductOption, to_number
from storefront_sdk.catalog.selection import normalize_selection
from storefront_sdk.domain.base import ValueObject

logger = structlog.get_logger()


class _Identified(Protocol):
    id: str | None
    name: str


C = TypeVar("C", bound=_Identified)


def resolve_by_id_then_name(candidates: Sequence[C], token: Any) -> C | None:
    """Find a candidate by id, falling back to a case-sensitive name match.

    Args:
        candidates: Options, option values or plans, in declaration order.
        token: Caller-supplied id or name.

    Returns:
        The first candidate whose id equals ``token``, else the first whose
        name equals it, else None.
    """
    if token is None:
        return None
    token = str(token)
    for candidate in candidates:
        if candidate.id is not None and candidate.id == token:
            return candidate
    for candidate in candidates:
        if candidate.name == token:
            return candidate
    return None


@dataclass(frozen=True)
class ResolvedOption(ValueObject):
    """A selection entry resolved against the product's options.

    Attributes:
        option_id: Id of the option (None if the option has no id).
        option_name: Display name of the option.
        value_id: Id of the selected value; None for free-form input.
        value: Name of the selected value, or the raw free-form input.
        variant: Whether the option participates in variant matching.
        price: Price delta carried by the value.
        stock_status: Stock status override carried by the value.
    """

    option_id: str | None
    option_name: str
    value_id: str | None
    value: Any
    variant: bool = False
    price: Decimal | None = None
    stock_status: str | None = None

    @property
    def option_key(self) -> str:
        return self.option_id if self.option_id is not None else self.option_name

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.option_id,
            "name": self.option_name,
            "value": self.value,
            "value_id": self.value_id,
            "variant": self.variant,
            "price": to_number(self.price),
        }


def _from_value(option: ProductOption, value: OptionValue) -> ResolvedOption:
    return ResolvedOption(
        option_id=option.id,
        option_name=option.name,
        value_id=value.id,
        value=value.name,
        variant=option.variant,
        price=value.price,
        stock_status=value.stock_status,
    )


def _resolve_values(
    option: ProductOption, raw: Any
) -> tuple[ResolvedOption, ...] | None:
    """Resolve the value part of one entry.

    Returns:
        Resolved values; an empty tuple when the entry deliberately selects
        nothing (toggle off, blank input); None when it cannot be resolved.
    """
    if option.input_type == "toggle":
        if not raw:
            return ()
        if option.values:
            return (_from_value(option, option.values[0]),)
        return (
            ResolvedOption(
                option_id=option.id,
                option_name=option.name,
                value_id=None,
                value=True,
                variant=option.variant,
            ),
        )

    if option.is_free_form:
        if raw is None or raw == "":
            return ()
        return (
            ResolvedOption(
                option_id=option.id,
                option_name=option.name,
                value_id=None,
                value=raw,
                variant=option.variant,
            ),
        )

    tokens = list(raw) if isinstance(raw, (list, tuple)) else [raw]
    if option.input_type != "multi_select" or option.variant:
        tokens = tokens[:1]

    resolved: list[ResolvedOption] = []
    picked: list[OptionValue] = []
    for token in tokens:
        value = resolve_by_id_then_name(option.values, token)
        if value is None:
            logger.debug(
                "Dropped unresolved option value",
                option=option.key,
                value=token,
            )
            continue
        if any(value is p for p in picked):
            continue
        picked.append(value)
        resolved.append(_from_value(option, value))

    if not resolved:
        return () if not tokens else None
    return tuple(resolved)


def resolve_selection(
    options: Sequence[ProductOption], selection: Any
) -> tuple[ResolvedOption, ...]:
    """Resolve a selection against a product's options.

    When the same option is selected more than once, the last entry wins.

    Args:
        options: The product's options in declaration order.
        selection: ListForm/MapForm, or raw caller input (list, mapping, None).

    Returns:
        Resolved options ordered by the product's option declaration order.
    """
    chosen: dict[int, tuple[ResolvedOption, ...]] = {}

    for entry in normalize_selection(selection):
        option = None
        for key in entry.keys:
            option = resolve_by_id_then_name(options, key)
            if option is not None:
                break
        if option is None:
            logger.debug("Dropped unresolved selection entry", option=entry.keys[0])
            continue

        values = _resolve_values(option, entry.value)
        if values is None:
            logger.debug(
                "Dropped unresolved selection entry",
                option=option.key,
                value=entry.value,
            )
            continue

        index = next(i for i, candidate in enumerate(options) if candidate is option)
        chosen[index] = values

    return tuple(resolved for index in sorted(chosen) for resolved in chosen[index])
