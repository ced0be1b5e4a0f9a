"""Multilingual text value type.

A :class:`MultilingualText` stores every language variant of a string and,
once resolved against a :class:`~multitext.context.TranslationContext`, the
``display``/``second`` projection that API responses expose. Resolution is
one-shot per instance so a response that passes through several formatting
layers is only projected once.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .codec import dump_json, dump_yaml, load_json, load_yaml, normalise_payload
from .context import ResolutionState, TranslationContext


@dataclass(slots=True)
class MultilingualText:
    """A string available in several languages plus its resolved projection.

    ``translations`` is the source of truth; ``None`` means unset, which is
    distinct from an empty mapping. ``display`` and ``second`` are derived and
    overwritten wholesale on every resolution pass. The resolution state never
    takes part in equality or in the wire representation.
    """

    translations: dict[str, str] | None = None
    display: str = ""
    second: str = ""
    _state: ResolutionState = field(
        default=ResolutionState.UNRESOLVED, init=False, repr=False, compare=False
    )

    @classmethod
    def new(cls, lang: str, text: str) -> MultilingualText:
        return cls(translations={lang: text})

    def init(self) -> MultilingualText:
        if self.translations is None:
            self.translations = {}
        return self

    def reset(self) -> None:
        self.translations = None
        self.display = ""
        self.second = ""
        self._state = ResolutionState.UNRESOLVED

    # Resolution -----------------------------------------------------------

    @property
    def resolution_state(self) -> ResolutionState:
        return self._state

    @property
    def is_resolved(self) -> bool:
        return self._state is ResolutionState.RESOLVED

    def reset_ctx_applied(self) -> None:
        """Forget that a context was applied; the projection is kept."""

        self._state = ResolutionState.UNRESOLVED

    def clear_context(self) -> MultilingualText:
        """Drop the resolved projection without touching the resolution state."""

        self.display = ""
        self.second = ""
        return self

    def _clear_resolution(self) -> MultilingualText:
        self.display = ""
        self.second = ""
        self._state = ResolutionState.UNRESOLVED
        return self

    def apply_translation_ctx(self, ctx: TranslationContext | None) -> MultilingualText:
        """Project the translations onto ``ctx`` unless already resolved.

        ``display`` takes the context's display language when it has
        non-empty text there, otherwise whatever the fallback language holds.
        ``second`` never falls back. When the context does not want the full
        translation list, the source mapping is discarded for good.
        """

        if ctx is None or self._state is ResolutionState.RESOLVED:
            return self

        self._state = ResolutionState.RESOLVED
        translations = self.translations or {}

        text = translations.get(ctx.get_display(), "")
        self.display = text if text else translations.get(ctx.get_fallback(), "")
        self.second = translations.get(ctx.get_second(), "")

        if not ctx.get_translation_list():
            self.translations = None

        return self

    def reapply_translation_ctx(self, ctx: TranslationContext) -> MultilingualText:
        """Resolve against ``ctx`` even if a context was applied before."""

        self._state = ResolutionState.UNRESOLVED
        return self.apply_translation_ctx(ctx)

    # Copying --------------------------------------------------------------

    def clone(self) -> MultilingualText:
        cloned = MultilingualText(
            translations=dict(self.translations) if self.translations is not None else None,
            display=self.display,
            second=self.second,
        )
        cloned._state = self._state
        return cloned

    @staticmethod
    def clone_of(text: MultilingualText | None) -> MultilingualText | None:
        """Clone an optional field, keeping an absent value absent."""

        return text.clone() if text is not None else None

    # Queries --------------------------------------------------------------

    def empty(self) -> bool:
        """Return ``True`` when no source translation carries any text."""

        return not any(self.translations.values()) if self.translations else True

    def has_translation(self) -> bool:
        """Return ``True`` when there is source text or a resolved projection."""

        return not self.empty() or self.display != "" or self.second != ""

    def max_length(self) -> int:
        """Return the length of the longest translation."""

        if not self.translations:
            return 0
        return max(len(text) for text in self.translations.values())

    def get_translate(self, lang: str) -> str:
        if not self.translations:
            return ""
        return self.translations.get(lang, "")

    def equivalent(self, other: MultilingualText) -> bool:
        """Compare the visible state only, ignoring whether a context was applied."""

        return (
            self.translations == other.translations
            and self.display == other.display
            and self.second == other.second
        )

    # Mutation -------------------------------------------------------------

    def update(self, other: MultilingualText) -> None:
        translations = self.init().translations
        for lang, text in (other.translations or {}).items():
            translations[lang.lower()] = text

    def add(self, other: MultilingualText) -> None:
        translations = self.init().translations
        for lang, text in (other.translations or {}).items():
            key = lang.lower()
            translations[key] = translations.get(key, "") + text

    def add_translate(self, lang: str, text: str) -> MultilingualText:
        # The key is stored as given, unlike update/add/map/join which
        # lowercase it. Existing consumers may rely on that.
        self.init().translations[lang] = text
        return self

    def map(self, func: Callable[[str], str]) -> MultilingualText:
        if not self.translations:
            return MultilingualText()

        return MultilingualText(
            translations={lang.lower(): func(text) for lang, text in self.translations.items()}
        )

    def join(self, other: MultilingualText, separator: str) -> MultilingualText:
        joined = self.clone()._clear_resolution().init()
        translations = joined.translations
        for lang, text in (other.translations or {}).items():
            key = lang.lower()
            if key not in translations:
                translations[key] = text
                continue
            translations[key] += separator + text
        return joined

    def trim(self) -> int:
        trimmed = self.map(str.strip)
        self.translations = trimmed.translations
        self.display = trimmed.display
        self.second = trimmed.second
        self._state = trimmed._state
        return self.max_length()

    # Serialisation --------------------------------------------------------

    def __str__(self) -> str:
        return dump_json(
            dict(sorted(self.translations.items())) if self.translations is not None else None
        )

    @classmethod
    def from_json(cls, raw: str | bytes) -> MultilingualText:
        return decode_payload(load_json(raw))

    def to_json(self) -> str:
        return dump_json(encode_payload(self))

    @classmethod
    def from_yaml(cls, raw: str) -> MultilingualText:
        return decode_payload(load_yaml(raw))

    def to_yaml(self) -> str:
        return dump_yaml(encode_payload(self))

    @classmethod
    def _validate(cls, value: Any) -> MultilingualText:
        if isinstance(value, cls):
            # Records own their texts; resolving one must not touch the caller.
            return value.clone()
        return decode_payload(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(encode_payload),
        )


def decode_payload(data: Mapping[str, Any] | Any) -> MultilingualText:
    """Build a text from a parsed payload in either the current or legacy shape."""

    fields = normalise_payload(data)
    return MultilingualText(
        translations=fields.translations,
        display=fields.display,
        second=fields.second,
    )


def encode_payload(text: MultilingualText) -> dict[str, Any]:
    """Return the current wire shape for ``text``."""

    return {
        "display": text.display,
        "second": text.second,
        "translate": dict(text.translations) if text.translations is not None else None,
    }


__all__ = ["MultilingualText", "decode_payload", "encode_payload"]
