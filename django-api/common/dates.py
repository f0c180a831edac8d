"""ISO-8601 parsing for request values."""

from datetime import date, datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime, parse_time

from common.errors import InvalidDateError


def parse_request_date(value: object, field_name: str) -> date:
    """Parse a YYYY-MM-DD date; a full ISO datetime contributes its date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(field_name)
    try:
        parsed = parse_date(value)
        if parsed is None:
            moment = parse_datetime(value)
            parsed = moment.date() if moment is not None else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidDateError(field_name)
    return parsed


def parse_request_time(value: object, field_name: str) -> time:
    """Parse an HH:MM[:SS] time of day."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(field_name)
    try:
        parsed = parse_time(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidDateError(field_name)
    return parsed


def parse_request_datetime(value: object, field_name: str) -> datetime:
    """Parse an ISO-8601 datetime; naive values are taken as current timezone."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        try:
            moment = parse_datetime(value)
        except ValueError:
            moment = None
        if moment is None:
            raise InvalidDateError(field_name)
    else:
        raise InvalidDateError(field_name)
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    return moment
