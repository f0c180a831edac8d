"""Domain primitives for venue bookings."""

from dataclasses import dataclass
from datetime import date, time, timedelta
from enum import Enum

from common.value_objects import Identifier

SECONDS_PER_DAY = 24 * 60 * 60
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class VenueId(Identifier):
    """Unique identifier for a Venue."""


@dataclass(frozen=True)
class BookingId(Identifier):
    """Unique identifier for a VenueBooking."""


class ApprovalStatus(str, Enum):
    """Approval status of a venue booking."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


# Pending bookings are provisional holds and block the slot like approved ones.
BLOCKING_STATUSES = frozenset({ApprovalStatus.PENDING, ApprovalStatus.APPROVED})


def _seconds(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


@dataclass(frozen=True)
class BookingWindow:
    """Dates a venue is held for, and the time of day it is held on each.

    A start_time after end_time wraps past midnight: the hold begun on each
    day runs into the next one. Equal times hold the whole day.
    """

    start_date: date
    end_date: date
    start_time: time
    end_time: time

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValueError("start_date cannot be after end_date")

    @property
    def wraps_midnight(self) -> bool:
        return self.start_time > self.end_time

    @property
    def last_day(self) -> date:
        """Last calendar day the window reaches into."""
        if self.wraps_midnight:
            return self.end_date + ONE_DAY
        return self.end_date

    def daily_span(self) -> tuple[int, int]:
        """Half-open [start, end) seconds from the midnight the hold begins on."""
        start, end = _seconds(self.start_time), _seconds(self.end_time)
        if start < end:
            return start, end
        if start == end:
            return 0, SECONDS_PER_DAY
        return start, SECONDS_PER_DAY + end

    def dates_overlap(self, other: "BookingWindow") -> bool:
        return self.start_date <= other.last_day and other.start_date <= self.last_day

    def overlaps(self, other: "BookingWindow") -> bool:
        if not self.dates_overlap(other):
            return False
        a_start, a_end = self.daily_span()
        b_start, b_end = other.daily_span()
        # A hold begun on one day can only meet holds begun a day either side.
        day = max(self.start_date, other.start_date - ONE_DAY)
        last = min(self.end_date, other.end_date + ONE_DAY)
        while day <= last:
            for offset in (-1, 0, 1):
                if not other.start_date <= day + timedelta(days=offset) <= other.end_date:
                    continue
                shift = offset * SECONDS_PER_DAY
                if a_start < b_end + shift and b_start + shift < a_end:
                    return True
            day += ONE_DAY
        return False
