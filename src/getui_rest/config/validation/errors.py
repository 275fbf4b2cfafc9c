"""Config validation errors raised while loading Getui credentials."""
from __future__ import annotations

from getui_rest.kernel.errors import ApplicationError
from getui_rest.kernel.security import DEFAULT_SENSITIVE_FIELDS

ENV_PREFIX = "GETUI_"


def env_var_name(setting_name: str) -> str:
    """``app_secret`` -> ``GETUI_APP_SECRET``; already prefixed names pass through."""
    name = setting_name.upper()
    return name if name.startswith(ENV_PREFIX) else f"{ENV_PREFIX}{name}"


def _shown(env_var: str, value: object) -> str:
    field = env_var[len(ENV_PREFIX):].lower()
    if field in DEFAULT_SENSITIVE_FIELDS and value:
        return "[REDACTED]"
    return repr(value)


class ConfigError(ApplicationError):
    """The client's account settings could not be loaded."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An account credential is absent from every configured source."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        self.setting_name = env_var_name(setting_name)
        super().__init__(
            f"{self.setting_name} is not set",
            detail={"setting": self.setting_name},
        )


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable. Secret values are never echoed."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        self.setting_name = env_var_name(setting_name)
        self.value = value
        self.reason = reason
        super().__init__(
            f"{self.setting_name}={_shown(self.setting_name, value)}: {reason}",
            detail={"setting": self.setting_name, "reason": reason},
        )


__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "env_var_name",
]
