"""Domain primitives for registrations."""

from dataclasses import dataclass
from enum import Enum

from common.value_objects import Identifier


@dataclass(frozen=True)
class RegistrationId(Identifier):
    """Unique identifier for a Registration."""


class PaymentStatus(str, Enum):
    """Payment status recorded on a registration."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class RegistrationState(str, Enum):
    """Lifecycle state; a registration is created active and ends attended."""

    ACTIVE = "active"
    ATTENDED = "attended"
