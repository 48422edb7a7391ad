"""Base classes for the domain layer.

Value objects produced by the variation engine are immutable and compared
by their attributes, so two resolutions of the same selection are equal.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for value objects.

    Value objects are immutable and compared by their attributes,
    not by identity.

    Example:
        @dataclass(frozen=True)
        class ResolvedOption(ValueObject):
            option_id: str
            value_id: str | None
    """

    pass
