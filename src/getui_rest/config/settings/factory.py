"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from getui_rest.config.settings.base import Settings
from getui_rest.config.settings.loaders import SettingsLoader
from getui_rest.config.validation.errors import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


def _is_required(field: dataclasses.Field[Any]) -> bool:
    return field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING


class SettingsFactory:
    """Build provider credentials from layered sources.

    Each loader contributes a full settings instance; later loaders win on
    every field they produced and ``overrides`` win over all of them. A
    loader that cannot produce settings (``ConfigError``) contributes
    nothing, so ``overrides`` alone are enough in tests.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        values: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                loaded = loader.load(settings_cls)
            except ConfigError:
                continue
            values.update(dataclasses.asdict(loaded))
        values.update(overrides or {})

        missing = [
            f.name for f in dataclasses.fields(settings_cls)  # type: ignore[arg-type]
            if _is_required(f) and f.name not in values
        ]
        if missing:
            raise MissingRequiredSettingError(missing[0])

        try:
            return settings_cls(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
