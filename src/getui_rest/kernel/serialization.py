"""Kernel serialization – strip absent values before a body hits the wire."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["compact", "remove_none"]


def compact(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow copy of *fields* without the keys whose value is ``None``."""
    return {k: v for k, v in fields.items() if v is not None}


def remove_none(value: Any) -> Any:
    """Recursively drop ``None`` values from mappings.

    Lists are kept (order and length preserved) but mappings inside them are
    cleaned as well. Falsy values such as ``0``, ``False`` or ``""`` survive.
    """
    if isinstance(value, Mapping):
        return {k: remove_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [remove_none(v) for v in value]
    return value
