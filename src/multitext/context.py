"""Viewing contexts consumed when resolving multilingual text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class ResolutionState(str, Enum):
    """Whether a text has already been projected onto a viewing context."""

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


@runtime_checkable
class TranslationContext(Protocol):
    """Resolution policy supplied by the caller (usually the current request)."""

    def get_display(self) -> str:
        ...

    def get_fallback(self) -> str:
        ...

    def get_second(self) -> str:
        ...

    def get_translation_list(self) -> bool:
        ...


@dataclass(frozen=True)
class StaticContext:
    """Immutable context with fixed language codes."""

    display: str
    fallback: str = ""
    second: str = ""
    translation_list: bool = True

    def get_display(self) -> str:
        return self.display

    def get_fallback(self) -> str:
        return self.fallback

    def get_second(self) -> str:
        return self.second

    def get_translation_list(self) -> bool:
        return self.translation_list


__all__ = ["ResolutionState", "StaticContext", "TranslationContext"]
