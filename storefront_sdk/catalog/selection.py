"""Option selections.

A caller selects option values either as a list of ``{"id"|"name": ...,
"value": ...}`` entries or as a mapping of option key to value. Both are
modelled explicitly and normalized once into a sequence of entries; the
resolver never looks at the caller's shape again.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import structlog

from storefront_sdk.domain.base import ValueObject

logger = structlog.get_logger()


@dataclass(frozen=True)
class SelectionEntry(ValueObject):
    """One selected option.

    Attributes:
        keys: Option lookup tokens, tried in order (id before name).
        value: Selected value token(s), or the raw input of a free-form option.
    """

    keys: tuple[str, ...]
    value: Any


@dataclass(frozen=True)
class ListForm(ValueObject):
    """Selection given as an ordered sequence of entries."""

    entries: tuple[Any, ...]


@dataclass(frozen=True)
class MapForm(ValueObject):
    """Selection given as an option-key to value mapping."""

    mapping: Mapping[str, Any]


Selection = ListForm | MapForm


def to_selection(raw: Any) -> Selection:
    """Tag raw caller input as a ListForm or a MapForm.

    ``None`` and unsupported shapes become an empty selection.
    """
    if isinstance(raw, (ListForm, MapForm)):
        return raw
    if raw is None:
        return MapForm(mapping={})
    if isinstance(raw, Mapping):
        return MapForm(mapping=dict(raw))
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        return ListForm(entries=tuple(raw))
    logger.warning("Ignoring unsupported selection", received_type=type(raw).__name__)
    return MapForm(mapping={})


def _list_entry(item: Any) -> SelectionEntry | None:
    if isinstance(item, Mapping):
        keys = tuple(
            str(item[k]) for k in ("id", "name") if item.get(k) is not None
        )
        if not keys:
            return None
        return SelectionEntry(keys=keys, value=item.get("value"))
    if isinstance(item, (list, tuple)) and len(item) == 2 and item[0] is not None:
        return SelectionEntry(keys=(str(item[0]),), value=item[1])
    return None


def normalize_selection(raw: Any) -> tuple[SelectionEntry, ...]:
    """Normalize any selection into entries, in the caller's order.

    List items without an option key are skipped.
    """
    selection = to_selection(raw)
    if isinstance(selection, MapForm):
        return tuple(
            SelectionEntry(keys=(str(key),), value=value)
            for key, value in selection.mapping.items()
        )

    entries = []
    for item in selection.entries:
        entry = _list_entry(item)
        if entry is None:
            logger.debug("Skipping selection entry without option key", entry=item)
            continue
        entries.append(entry)
    return tuple(entries)
