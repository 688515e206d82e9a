"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class ShopDomain(ValueObject):
    """Storefront domain a license is bound to."""

    value: str

    def __post_init__(self):
        """Validate domain."""
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Shop domain cannot be empty")
        if len(self.value) > 255:
            raise ValueError("Shop domain too long")

    def has_suffix(self, suffix: str) -> bool:
        """Return True if the domain ends with the platform suffix."""
        return self.value.endswith(suffix)

    def __str__(self) -> str:
        """Return domain as string."""
        return self.value


class BindingKind(Enum):
    """How an accepted activation relates to the existing binding."""

    NEW_BINDING = "new_binding"
    REACTIVATION = "reactivation"

    def __str__(self) -> str:
        """Return binding kind as string."""
        return self.value
