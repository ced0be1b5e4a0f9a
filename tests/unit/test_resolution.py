"""Unit coverage for resolving multilingual text against a viewing context."""

from __future__ import annotations

from multitext import MultilingualText, ResolutionState, StaticContext


def test_display_uses_preferred_language(russian_context: StaticContext) -> None:
    """The display language wins when it carries text."""

    text = MultilingualText(translations={"ru": "Привет", "en": "Hello"})

    result = text.apply_translation_ctx(russian_context)

    assert result is text
    assert text.display == "Привет"
    assert text.second == "Hello"
    assert text.resolution_state is ResolutionState.RESOLVED
    assert text.translations == {"ru": "Привет", "en": "Hello"}


def test_display_falls_back_once() -> None:
    """A missing display language falls back to the single fallback language."""

    text = MultilingualText(translations={"en": "Hello"})

    text.apply_translation_ctx(StaticContext(display="fr", fallback="en"))

    assert text.display == "Hello"


def test_display_is_empty_when_fallback_missing() -> None:
    """There is no fallback chain beyond the single fallback language."""

    text = MultilingualText(translations={"en": "Hello"})

    text.apply_translation_ctx(StaticContext(display="fr", fallback="de"))

    assert text.display == ""


def test_empty_display_value_triggers_fallback() -> None:
    """An empty string under the display language counts as missing."""

    text = MultilingualText(translations={"fr": "", "en": "Hello"})

    text.apply_translation_ctx(StaticContext(display="fr", fallback="en"))

    assert text.display == "Hello"


def test_second_never_falls_back() -> None:
    """``second`` only reads the context's second language."""

    text = MultilingualText(translations={"en": "Hello"})

    text.apply_translation_ctx(StaticContext(display="en", fallback="en", second="de"))

    assert text.display == "Hello"
    assert text.second == ""


def test_resolution_is_applied_once(russian_context: StaticContext) -> None:
    """A second context must not overwrite the first projection."""

    text = MultilingualText(translations={"ru": "Привет", "en": "Hello"})
    text.apply_translation_ctx(russian_context)

    text.apply_translation_ctx(
        StaticContext(display="en", fallback="en", second="ru", translation_list=False)
    )

    assert text.display == "Привет"
    assert text.second == "Hello"
    assert text.translations == {"ru": "Привет", "en": "Hello"}


def test_translation_list_suppression_discards_source() -> None:
    """Contexts without a translation list keep only the projection."""

    text = MultilingualText(translations={"en": "Hello", "ru": "Привет"})

    text.apply_translation_ctx(
        StaticContext(display="ru", fallback="en", second="en", translation_list=False)
    )

    assert text.translations is None
    assert text.empty()
    assert text.display == "Привет"
    assert text.second == "Hello"
    assert text.has_translation()


def test_unset_text_resolves_to_empty_projection(russian_context: StaticContext) -> None:
    """Resolving a text with no translations is total."""

    text = MultilingualText()

    text.apply_translation_ctx(russian_context)

    assert text.display == ""
    assert text.second == ""
    assert text.is_resolved


def test_missing_context_is_a_no_op() -> None:
    """Passing no context leaves the text untouched and unresolved."""

    text = MultilingualText.new("en", "Hello")

    assert text.apply_translation_ctx(None) is text
    assert text.display == ""
    assert not text.is_resolved


def test_clear_context_keeps_guard(russian_context: StaticContext) -> None:
    """Clearing the projection does not re-enable resolution."""

    text = MultilingualText(translations={"ru": "Привет", "en": "Hello"})
    text.apply_translation_ctx(russian_context)

    assert text.clear_context() is text
    assert text.display == ""
    assert text.second == ""
    assert text.is_resolved

    text.apply_translation_ctx(russian_context)

    assert text.display == ""


def test_reset_ctx_applied_allows_another_pass(russian_context: StaticContext) -> None:
    """Resetting the guard keeps the projection but permits resolution again."""

    text = MultilingualText(translations={"ru": "Привет", "en": "Hello"})
    text.apply_translation_ctx(russian_context)

    text.reset_ctx_applied()

    assert not text.is_resolved
    assert text.display == "Привет"

    text.apply_translation_ctx(StaticContext(display="en", second="ru"))

    assert text.display == "Hello"
    assert text.second == "Привет"


def test_reapply_forces_resolution(russian_context: StaticContext) -> None:
    """The explicit re-resolve operation overrides the one-shot guard."""

    text = MultilingualText(translations={"ru": "Привет", "en": "Hello"})
    text.apply_translation_ctx(russian_context)

    text.reapply_translation_ctx(StaticContext(display="en", fallback="ru", second="ru"))

    assert text.display == "Hello"
    assert text.second == "Привет"
    assert text.is_resolved


def test_clone_isolates_concurrent_resolutions(russian_context: StaticContext) -> None:
    """Resolving a clone leaves the shared original untouched."""

    shared = MultilingualText(translations={"ru": "Привет", "en": "Hello"})

    view = shared.clone().apply_translation_ctx(
        StaticContext(display="en", translation_list=False)
    )

    assert view.display == "Hello"
    assert view.translations is None
    assert shared.translations == {"ru": "Привет", "en": "Hello"}
    assert not shared.is_resolved
