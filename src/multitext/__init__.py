"""Multilingual text fields with context-driven resolution."""

from .codec import DecodeError
from .context import ResolutionState, StaticContext, TranslationContext
from .embedding import MultilingualJSONProvider, apply_context, install_json_provider
from .settings import ConfigurationError, TextSettings, load_settings
from .text import MultilingualText, decode_payload, encode_payload

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "MultilingualJSONProvider",
    "MultilingualText",
    "ResolutionState",
    "StaticContext",
    "TextSettings",
    "TranslationContext",
    "apply_context",
    "decode_payload",
    "encode_payload",
    "install_json_provider",
    "load_settings",
]
