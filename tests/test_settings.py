"""Test process-level settings and logger setup."""

import logging

import pytest
from pydantic import ValidationError

from scrutinizer.config import Settings, load_settings
from scrutinizer.utils.logger import VerbosityLevel, setup_logger


class TestSettings:
    """Test SCRUTINIZER_* environment settings."""

    def test_defaults(self, monkeypatch):
        for name in ["COMMAND_TIMEOUT", "VERBOSITY", "COLOR", "FAIL_FAST"]:
            monkeypatch.delenv(f"SCRUTINIZER_{name}", raising=False)

        settings = load_settings()

        assert settings.command_timeout == 300
        assert settings.verbosity == "normal"
        assert settings.color is True
        assert settings.fail_fast is True

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SCRUTINIZER_COMMAND_TIMEOUT", "600")
        monkeypatch.setenv("SCRUTINIZER_VERBOSITY", "DEBUG")
        monkeypatch.setenv("SCRUTINIZER_FAIL_FAST", "false")

        settings = Settings()

        assert settings.command_timeout == 600
        assert settings.verbosity == "debug"
        assert settings.fail_fast is False

    @pytest.mark.parametrize(
        "name,value",
        [("SCRUTINIZER_VERBOSITY", "loud"), ("SCRUTINIZER_COMMAND_TIMEOUT", "0")],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            Settings()


class TestLoggerSetup:
    """Test verbosity to logging level mapping."""

    @pytest.fixture(autouse=True)
    def cleanup(self):
        yield
        logging.getLogger("test.setup").handlers.clear()

    @pytest.mark.parametrize(
        "verbosity,level",
        [
            (VerbosityLevel.QUIET, logging.ERROR),
            (VerbosityLevel.NORMAL, logging.INFO),
            (VerbosityLevel.VERBOSE, logging.INFO),
            (VerbosityLevel.DEBUG, logging.DEBUG),
        ],
    )
    def test_levels(self, verbosity, level):
        log = setup_logger("test.setup", verbosity)

        assert log.level == level
        assert len(log.handlers) == 1

    def test_repeated_setup_keeps_one_handler(self):
        setup_logger("test.setup")
        log = setup_logger("test.setup", VerbosityLevel.DEBUG)

        assert len(log.handlers) == 1

    def test_verbosity_ordering(self):
        assert VerbosityLevel.DEBUG >= VerbosityLevel.VERBOSE
        assert VerbosityLevel.VERBOSE > VerbosityLevel.NORMAL
        assert not VerbosityLevel.QUIET >= VerbosityLevel.NORMAL
