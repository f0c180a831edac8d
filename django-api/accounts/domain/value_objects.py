"""Identifiers for accounts."""

from dataclasses import dataclass

from common.value_objects import Identifier


@dataclass(frozen=True)
class OrganizationId(Identifier):
    """Unique identifier for an Organization."""


@dataclass(frozen=True)
class UserId(Identifier):
    """Unique identifier for a User."""
