"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from getui_rest.kernel.security import DEFAULT_SENSITIVE_FIELDS

REDACTED = "[REDACTED]"


class SensitiveFieldsFilter:
    """structlog processor hiding credentials in log events.

    Getui bodies nest credentials at any depth: ``sign`` in the
    ``/auth_sign`` body, ``authtoken`` in request headers, entries of a
    ``msg_list`` batch. Mappings and lists are walked recursively and key
    matching ignores case.
    """

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS
        self._fields = frozenset(f.lower() for f in fields)

    def __call__(self, logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact(event_dict)

    def redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                k: REDACTED if str(k).lower() in self._fields else self.redact(v)
                for k, v in value.items()
            }
        if isinstance(value, list):
            return [self.redact(item) for item in value]
        return value


__all__ = ["REDACTED", "SensitiveFieldsFilter"]
