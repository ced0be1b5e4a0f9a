"""Wire-format decoding for multilingual text payloads.

Two shapes are accepted. The current shape carries a free-form language map
alongside the resolved projection::

    {"display": "...", "second": "...", "translate": {"<lang>": "..."}}

The legacy shape only ever carried the two fixed languages::

    {"translate": {"en": "...", "ru": "..."}}

Decoding is a pure function over already-parsed structures so it can be used
with JSON, YAML or in-memory mappings alike. Every payload is type-checked
against the generic schema first. The legacy shape is then committed only when
its ``translate`` object matches strictly and carries some text; everything
else keeps the generic decoding.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

_LOGGER = logging.getLogger(__name__)

PRIMARY_LANGUAGE = "ru"
SECONDARY_LANGUAGE = "en"
_LEGACY_KEYS = frozenset({PRIMARY_LANGUAGE, SECONDARY_LANGUAGE})
_ERROR_PREFIX = "Invalid multilingual text payload"


class DecodeError(ValueError):
    """Raised when a payload cannot be read as a multilingual text."""


class _WireModel(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)


class LegacyTranslate(_WireModel):
    """The fixed two-language ``translate`` object of the legacy shape."""

    model_config = ConfigDict(extra="forbid")

    en: str | None = None
    ru: str | None = None


class WirePayload(_WireModel):
    """The current wire shape; unknown top-level keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    display: str | None = None
    second: str | None = None
    translate: dict[str, str | None] | None = None


@dataclass(frozen=True, slots=True)
class DecodedFields:
    """Normalised field values ready to populate a text instance."""

    translations: dict[str, str]
    display: str
    second: str


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"{_ERROR_PREFIX}: {details}"


def _match_legacy(raw: Mapping[str, str | None] | None) -> LegacyTranslate | None:
    if raw is None or not set(raw) <= _LEGACY_KEYS:
        return None

    try:
        legacy = LegacyTranslate.model_validate(dict(raw))
    except ValidationError:
        return None

    if not (legacy.en or legacy.ru):
        return None
    return legacy


def _decode_legacy(legacy: LegacyTranslate) -> DecodedFields:
    secondary = legacy.en or ""
    primary = legacy.ru or ""

    translations: dict[str, str] = {}
    if secondary:
        translations[SECONDARY_LANGUAGE] = secondary
    if primary:
        translations[PRIMARY_LANGUAGE] = primary

    return DecodedFields(translations=translations, display=primary, second=secondary)


def _decode_current(payload: WirePayload) -> DecodedFields:
    """Apply the generic rules.

    Unlike older decoders, ru/en are only backfilled from non-empty projection
    fields, so a round trip never grows empty entries.
    """

    translations = {
        lang: text or "" for lang, text in (payload.translate or {}).items()
    }
    display = payload.display or ""
    second = payload.second or ""

    if PRIMARY_LANGUAGE not in translations and display:
        translations[PRIMARY_LANGUAGE] = display
    if SECONDARY_LANGUAGE not in translations and second:
        translations[SECONDARY_LANGUAGE] = second

    if not display and PRIMARY_LANGUAGE in translations:
        display = translations[PRIMARY_LANGUAGE]
    if not second and SECONDARY_LANGUAGE in translations:
        second = translations[SECONDARY_LANGUAGE]

    return DecodedFields(translations=translations, display=display, second=second)


def normalise_payload(data: Any) -> DecodedFields:
    """Decode ``data`` from either wire shape into normalised field values."""

    if not isinstance(data, Mapping):
        _LOGGER.debug("Rejected multilingual text payload of type %s", type(data).__name__)
        raise DecodeError(f"{_ERROR_PREFIX}: expected an object")

    try:
        payload = WirePayload.model_validate(dict(data))
    except ValidationError as error:
        message = format_validation_error(error)
        _LOGGER.debug("Rejected multilingual text payload: %s", message)
        raise DecodeError(message) from error

    legacy = _match_legacy(payload.translate)
    if legacy is not None:
        _LOGGER.debug("Decoding multilingual text from the legacy two-language shape")
        return _decode_legacy(legacy)

    return _decode_current(payload)


def load_json(raw: str | bytes) -> Any:
    """Parse ``raw`` JSON, reporting syntax problems as :class:`DecodeError`."""

    try:
        return json.loads(raw)
    except ValueError as error:
        raise DecodeError(f"{_ERROR_PREFIX}: {error}") from error


def load_yaml(raw: str) -> Any:
    """Parse ``raw`` YAML with the safe loader."""

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as error:
        raise DecodeError(f"{_ERROR_PREFIX}: {error}") from error


def dump_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)


def dump_yaml(payload: Any) -> str:
    return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)


__all__ = [
    "DecodeError",
    "DecodedFields",
    "LegacyTranslate",
    "PRIMARY_LANGUAGE",
    "SECONDARY_LANGUAGE",
    "WirePayload",
    "dump_json",
    "dump_yaml",
    "format_validation_error",
    "load_json",
    "load_yaml",
    "normalise_payload",
]
