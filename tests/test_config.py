"""Tests for Settings and the logging helper."""

import logging

import pytest

from molights.config import Settings
from molights.logging_utils import configure_logging, get_logger


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.log_level_value == logging.WARNING
        assert not settings.zero_castling
        assert not settings.unicode_board
        assert settings.event == "Casual Game"

    def test_log_level_normalised(self) -> None:
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_bad_log_level(self) -> None:
        with pytest.raises(ValueError):
            Settings(log_level="chatty")

    def test_from_env_mapping(self) -> None:
        settings = Settings.from_env(
            {
                "MOLIGHTS_LOG_LEVEL": "info",
                "MOLIGHTS_ZERO_CASTLING": "yes",
                "MOLIGHTS_UNICODE_BOARD": "0",
                "MOLIGHTS_EVENT": "Club Night",
                "MOLIGHTS_SITE": "Leeds",
            }
        )
        assert settings.log_level == "INFO"
        assert settings.zero_castling
        assert not settings.unicode_board
        assert settings.event == "Club Night"
        assert settings.site == "Leeds"

    def test_from_env_empty_mapping(self) -> None:
        assert Settings.from_env({}) == Settings()

    def test_from_process_env(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("MOLIGHTS_WHITE", "Ann")
        clean_env.setenv("MOLIGHTS_UNICODE_BOARD", "true")
        settings = Settings.from_env()
        assert settings.white == "Ann"
        assert settings.unicode_board

    def test_bad_boolean(self) -> None:
        with pytest.raises(ValueError, match="MOLIGHTS_ZERO_CASTLING"):
            Settings.from_env({"MOLIGHTS_ZERO_CASTLING": "maybe"})

    def test_record_headers(self) -> None:
        headers = Settings(white="Ann", black="Bo").record_headers()
        assert headers == {
            "Event": "Casual Game",
            "Site": "?",
            "White": "Ann",
            "Black": "Bo",
        }


class TestLogging:
    def test_configure_sets_level_once(self) -> None:
        logger = configure_logging(logging.DEBUG)
        assert logger.name == "molights"
        assert logger.level == logging.DEBUG
        handlers = list(logger.handlers)
        configure_logging("INFO")
        assert logger.handlers == handlers
        assert logger.level == logging.INFO

    def test_get_logger_reuses_handler(self) -> None:
        first = get_logger("molights.test_helper")
        second = get_logger("molights.test_helper")
        assert first is second
        assert len(second.handlers) == 1
