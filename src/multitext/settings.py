"""Default resolution settings loaded from YAML and the environment."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .context import StaticContext

_LOGGER = logging.getLogger(__name__)

SETTINGS_ENV = "MULTITEXT_SETTINGS"
_LANGUAGE_ENV = {
    "display": "MULTITEXT_DISPLAY",
    "fallback": "MULTITEXT_FALLBACK",
    "second": "MULTITEXT_SECOND",
}
_TRANSLATION_LIST_ENV = "MULTITEXT_TRANSLATION_LIST"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationError(ValueError):
    """Raised when settings values violate schema expectations."""


class TextSettings(BaseModel):
    """Default viewing context used when callers do not supply one."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    display: str = "ru"
    fallback: str = "en"
    second: str = "en"
    translation_list: bool = True

    @field_validator("display", "fallback", "second", mode="before")
    @classmethod
    def _normalise_language(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_context(self) -> StaticContext:
        return StaticContext(
            display=self.display,
            fallback=self.fallback,
            second=self.second,
            translation_list=self.translation_list,
        )


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must define a mapping at the top level")
    return data


def _parse_bool(value: str | None, *, env: str) -> bool | None:
    if value is None or not value.strip():
        return None
    normalised = value.strip().lower()
    if normalised in _TRUE_VALUES:
        return True
    if normalised in _FALSE_VALUES:
        return False
    _LOGGER.warning("Ignoring invalid value for %s: %s", env, value)
    return None


def _environment_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name, env in _LANGUAGE_ENV.items():
        value = os.getenv(env)
        if value is None:
            continue
        if not value.strip():
            _LOGGER.warning("Ignoring empty value for %s", env)
            continue
        overrides[name] = value

    translation_list = _parse_bool(
        os.getenv(_TRANSLATION_LIST_ENV), env=_TRANSLATION_LIST_ENV
    )
    if translation_list is not None:
        overrides["translation_list"] = translation_list
    return overrides


@lru_cache(maxsize=4)
def load_settings(path: str | Path | None = None) -> TextSettings:
    """Load and cache settings from ``path`` or ``$MULTITEXT_SETTINGS``.

    Environment overrides win over file values. Without a settings file the
    defaults apply.
    """

    raw: dict[str, Any] = {}
    if path is None:
        configured = os.getenv(SETTINGS_ENV)
        path = Path(configured).expanduser() if configured else None

    if path is not None:
        settings_file = Path(path)
        if not settings_file.exists():
            raise FileNotFoundError(f"Settings file missing: {settings_file}")
        raw = _load_yaml(settings_file)

    raw.update(_environment_overrides())

    try:
        return TextSettings.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Settings validation failed: {error}") from error


__all__ = [
    "ConfigurationError",
    "SETTINGS_ENV",
    "TextSettings",
    "load_settings",
]
