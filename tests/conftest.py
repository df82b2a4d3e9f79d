"""Shared pytest fixtures for textmarkup tests."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from textmarkup import Markup, MarkupType, Serialization
from textmarkup.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop TEXTMARKUP_* env vars and the cached Settings around every test."""
    for key in list(os.environ):
        if key.startswith("TEXTMARKUP_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bold_italic() -> Serialization:
    """``Some bold and italic text`` with "bold" bold and "italic" italic."""
    return Serialization(
        "p",
        "Some bold and italic text",
        [Markup(MarkupType.BOLD, 5, 9), Markup(MarkupType.ITALIC, 14, 20)],
    )


@pytest.fixture
def digits() -> Serialization:
    """Ten characters, bold over 2-6, italic over 5-10, link over 0-3."""
    return Serialization(
        "p",
        "0123456789",
        [
            Markup(MarkupType.BOLD, 2, 6),
            Markup(MarkupType.ITALIC, 5, 10),
            Markup(MarkupType.LINK, 0, 3, href="https://x.org"),
        ],
    )
