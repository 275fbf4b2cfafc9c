"""Application-layer errors – provider-level rejections."""

from __future__ import annotations

from typing import Any

from getui_rest.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class GetuiError(ApplicationError):
    """The provider answered, but with a ``result`` other than ``"ok"``.

    ``detail`` holds the provider's raw response object, so fields such as
    ``code`` or ``desc`` are available as ``err.detail["code"]``.
    """

    default_code = "getui_error"

    def __init__(
        self,
        result: str,
        response: dict[str, Any],
        *,
        path: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(result, detail=dict(response), **kwargs)
        self.result = result
        self.path = path

    @property
    def response(self) -> dict[str, Any]:
        return self.detail


__all__ = ["ApplicationError", "GetuiError"]
