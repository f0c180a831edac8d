"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Self, TypeVar
from uuid import UUID

from common.errors import InvalidIdentifierError

UUID_V4_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_uuid4(value: object) -> bool:
    return isinstance(value, str) and UUID_V4_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True)
class Identifier:
    """Base for UUID-backed entity identifiers."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        if not is_uuid4(value):
            raise ValueError(f"{value!r} is not a version-4 UUID")
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


IdentifierT = TypeVar("IdentifierT", bound=Identifier)


def parse_identifier(id_type: type[IdentifierT], value: str, field_name: str) -> IdentifierT:
    """Parse a request identifier, mapping bad input to InvalidIdentifierError."""
    try:
        return id_type.from_string(value)
    except ValueError:
        raise InvalidIdentifierError(field_name) from None


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
