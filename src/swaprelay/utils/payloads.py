"""Helpers for reading loosely-shaped JSON payloads from providers and relays."""

from typing import Any, Optional, Sequence


def first_present(payload: Any, fields: Sequence[str]) -> Optional[Any]:
    """Return the first truthy field of payload, checked in the given order.

    Empty strings and other falsy values count as missing, so the next
    field is tried.
    """
    if not isinstance(payload, dict):
        return None
    for name in fields:
        value = payload.get(name)
        if value:
            return value
    return None
