"""Helpers for records that embed multilingual text fields."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, TypeVar

from flask import Flask
from flask.json.provider import DefaultJSONProvider
from pydantic import BaseModel

from .context import TranslationContext
from .settings import load_settings
from .text import MultilingualText, encode_payload

T = TypeVar("T")


def _walk(value: Any, ctx: TranslationContext, seen: set[int]) -> None:
    if isinstance(value, MultilingualText):
        value.apply_translation_ctx(ctx)
        return
    if isinstance(value, (str, bytes, int, float, bool)) or value is None:
        return
    if id(value) in seen:
        return
    seen.add(id(value))

    if isinstance(value, BaseModel):
        for name in type(value).model_fields:
            _walk(getattr(value, name), ctx, seen)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        for item in dataclasses.fields(value):
            _walk(getattr(value, item.name), ctx, seen)
    elif isinstance(value, Mapping):
        for item in value.values():
            _walk(item, ctx, seen)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            _walk(item, ctx, seen)


def apply_context(value: T, ctx: TranslationContext | None = None) -> T:
    """Resolve every text reachable from ``value`` in place and return it.

    Without ``ctx`` the configured default context is used. Texts that were
    already resolved are left as they are.
    """

    context = ctx if ctx is not None else load_settings().to_context()
    _walk(value, context, set())
    return value


class MultilingualJSONProvider(DefaultJSONProvider):
    """Flask JSON provider aware of multilingual text and pydantic records."""

    ensure_ascii = False

    @staticmethod
    def default(o: Any) -> Any:
        if isinstance(o, MultilingualText):
            return encode_payload(o)
        if isinstance(o, BaseModel):
            return o.model_dump(mode="json", by_alias=True)
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            # Shallow, so nested texts come back through this hook.
            return {item.name: getattr(o, item.name) for item in dataclasses.fields(o)}
        return DefaultJSONProvider.default(o)


def install_json_provider(app: Flask) -> Flask:
    app.json = MultilingualJSONProvider(app)
    return app


__all__ = ["MultilingualJSONProvider", "apply_context", "install_json_provider"]
