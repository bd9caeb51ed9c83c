# ABOUTME: Attribute router mapping qualified names ("user_login") to presented entities
# ABOUTME: Longest registered prefix wins so "user_profile_bio" never lands on "user"

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple


class Route(NamedTuple):
    """Resolved target of a qualified attribute name."""

    type: str
    field: str


def attribute_prefix(type_name: str) -> str:
    return f"{type_name}_"


def by_longest_prefix(types: Iterable[str]) -> list[str]:
    """Order type names so longer (more specific) prefixes are tried first."""
    return sorted(types, key=len, reverse=True)


def resolve(name: str, types: Iterable[str]) -> Route | None:
    """Resolve ``name`` against the registered type names.

    Returns the route for the longest type whose ``"<type>_"`` prefix starts
    ``name``, or ``None`` when no type matches. A bare type name or a name
    that is only the prefix (``"user_"``) does not resolve.
    """
    for type_name in by_longest_prefix(types):
        prefix = attribute_prefix(type_name)
        if name.startswith(prefix) and len(name) > len(prefix):
            return Route(type_name, name[len(prefix) :])
    return None


def strip_prefix(name: str, types: Iterable[str]) -> str:
    """Return the entity-local part of ``name``, or ``name`` unchanged if nothing matches."""
    route = resolve(name, types)
    return route.field if route else name
