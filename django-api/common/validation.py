"""Request field checks shared by services."""

from collections.abc import Iterable, Mapping
from typing import Any

from common.errors import MissingFieldsError


def missing_fields(data: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    """Names of required fields that are absent or empty, in order."""
    return [name for name in required if data.get(name) in (None, "")]


def require_fields(data: Mapping[str, Any], required: Iterable[str]) -> None:
    missing = missing_fields(data, required)
    if missing:
        raise MissingFieldsError(missing)
