"""Tests for pydantic-settings configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

import textmarkup
from textmarkup.config import LoggingConfig, SerializationConfig, Settings, get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


class TestSerializationConfig:
    """SerializationConfig sub-model tests."""

    def test_default_tag_is_p(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.serialization.default_tag == "p"

    def test_tag_normalised(self) -> None:
        assert SerializationConfig(default_tag=" DIV ").default_tag == "div"

    def test_empty_tag_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SerializationConfig(default_tag="  ")

    def test_override_via_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEXTMARKUP_SERIALIZATION__DEFAULT_TAG", "li")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.serialization.default_tag == "li"


class TestLoggingConfig:
    """LoggingConfig sub-model tests."""

    def test_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.log.level == "INFO"
        assert s.log.log_dir is None

    def test_level_upper_cased(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="chatty")

    def test_log_dir_via_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEXTMARKUP_LOG__LOG_DIR", "/tmp/textmarkup-logs")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.log.log_dir == Path("/tmp/textmarkup-logs")


class TestGetSettings:
    """Singleton access tests."""

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert get_settings().serialization.default_tag == "p"
        monkeypatch.setenv("TEXTMARKUP_SERIALIZATION__DEFAULT_TAG", "h4")
        get_settings.cache_clear()
        assert get_settings().serialization.default_tag == "h4"


class TestSetupLogging:
    """setup_logging handler installation."""

    @pytest.fixture
    def root_handlers(self) -> Iterator[list[logging.Handler]]:
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        yield before
        for handler in root.handlers[len(before) :]:
            handler.close()
        root.handlers = before
        root.setLevel(level)

    def test_console_only_by_default(
        self, root_handlers: list[logging.Handler]
    ) -> None:
        textmarkup.setup_logging()
        added = logging.getLogger().handlers[len(root_handlers) :]
        assert len(added) == 1
        assert added[0].level == logging.INFO

    def test_file_handler_when_log_dir_set(
        self,
        root_handlers: list[logging.Handler],
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.setenv("TEXTMARKUP_LOG__LOG_DIR", str(tmp_path / "logs"))
        get_settings.cache_clear()
        textmarkup.setup_logging()
        added = logging.getLogger().handlers[len(root_handlers) :]
        assert len(added) == 2
        assert list((tmp_path / "logs").glob("textmarkup.*.log"))
