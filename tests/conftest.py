"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402

from multitext import StaticContext, install_json_provider, load_settings  # noqa: E402
from multitext.settings import SETTINGS_ENV  # noqa: E402

_SETTINGS_VARIABLES = (
    SETTINGS_ENV,
    "MULTITEXT_DISPLAY",
    "MULTITEXT_FALLBACK",
    "MULTITEXT_SECOND",
    "MULTITEXT_TRANSLATION_LIST",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep settings lookups independent of the developer environment."""

    for name in _SETTINGS_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()

    yield

    load_settings.cache_clear()


@pytest.fixture()
def russian_context() -> StaticContext:
    """Context preferring Russian with English as fallback and second language."""

    return StaticContext(display="ru", fallback="en", second="en")


@pytest.fixture()
def app() -> Flask:
    """Return a Flask application using the multilingual JSON provider."""

    application = install_json_provider(Flask(__name__))
    application.config.update(TESTING=True)
    return application
