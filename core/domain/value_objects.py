"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from core.domain.exceptions import InvalidInputError, InvalidTierError, MissingParameterError


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
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or not self.value.strip():
            raise MissingParameterError("Email required")
        if "@" not in self.value:
            raise InvalidInputError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class HardwareId(ValueObject):
    """Caller-supplied device identifier."""

    value: str

    def __post_init__(self):
        """Validate hardware identifier."""
        if not self.value or len(self.value.strip()) == 0:
            raise MissingParameterError("Hardware ID required")
        if len(self.value) > 255:
            raise InvalidInputError("Hardware ID too long")

    def __str__(self) -> str:
        """Return identifier as string."""
        return self.value


class OrderStatus(Enum):
    """Order status value object."""

    PENDING = "pending"
    COMPLETED = "completed"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


def require_tier(tier: str, allowed: Iterable[str]) -> str:
    """
    Check a tier against the configured tier set.

    Args:
        tier: Requested tier name
        allowed: Configured tier names

    Returns:
        The tier, unchanged

    Raises:
        InvalidTierError: If the tier is empty or not configured
    """
    allowed = list(allowed)
    if not tier or tier not in allowed:
        raise InvalidTierError(f"Invalid tier. Must be one of: {', '.join(allowed)}")
    return tier
