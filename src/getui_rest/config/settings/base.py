"""Config settings – Settings base class and the Getui account settings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from getui_rest.config.validation import InvalidSettingValueError

DEFAULT_BASE_URL = "https://restapi.getui.com/v1"


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class GetuiSettings(Settings):
    """Credentials and transport options for one Getui application.

    Loaded from ``GETUI_APP_ID``, ``GETUI_APP_SECRET``, ``GETUI_APP_KEY``,
    ``GETUI_MASTER_SECRET`` and optionally ``GETUI_BASE_URL`` /
    ``GETUI_TIMEOUT`` by :class:`EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "GETUI"

    app_id: str
    app_secret: str
    app_key: str
    master_secret: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0

    def _validate(self) -> None:
        for name in ("app_id", "app_secret", "app_key", "master_secret"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidSettingValueError(name, value, "must be a non-empty string")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")
        self.base_url = self.base_url.rstrip("/")


__all__ = ["DEFAULT_BASE_URL", "GetuiSettings", "Settings"]
