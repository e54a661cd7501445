"""Tests for runtime settings loading and logging configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest

from fifo_ledger.config import AppSettings, SettingsLoadError, config_configure_logging, config_load_settings

_SETTINGS_ENVIRONMENT_NAMES = (
    "ENVIRONMENT_NAME",
    "APPLICATION_HOST",
    "APPLICATION_PORT",
    "LOG_LEVEL",
    "LOG_JSON",
    "LEDGER_QUANTITY_PRECISION_PLACES",
    "API_MAX_ROWS",
)


@pytest.fixture(autouse=True)
def _clear_settings_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for environment_name in _SETTINGS_ENVIRONMENT_NAMES:
        monkeypatch.delenv(environment_name, raising=False)


def test_config_load_settings_uses_defaults() -> None:
    """Load defaults when no environment overrides are present.

    Returns:
        None: Assertions validate default values.

    Raises:
        AssertionError: Raised when defaults deviate.
    """

    settings = config_load_settings()

    assert settings.environment_name == "development"
    assert settings.application_port == 8000
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.ledger_quantity_precision_places == 5
    assert settings.api_max_rows == 10000


def test_config_load_settings_reads_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LEDGER_QUANTITY_PRECISION_PLACES", "3")
    monkeypatch.setenv("LOG_JSON", "true")

    settings = config_load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.ledger_quantity_precision_places == 3
    assert settings.log_json is True


@pytest.mark.parametrize(
    ("environment_name", "value"),
    [
        ("LOG_LEVEL", "verbose"),
        ("LEDGER_QUANTITY_PRECISION_PLACES", "13"),
        ("APPLICATION_PORT", "0"),
        ("ENVIRONMENT_NAME", "  "),
    ],
)
def test_config_load_settings_wraps_validation_errors(
    monkeypatch: pytest.MonkeyPatch,
    environment_name: str,
    value: str,
) -> None:
    """Raise SettingsLoadError for invalid environment values.

    Returns:
        None: Assertions validate wrapped validation error.

    Raises:
        AssertionError: Raised when invalid settings load successfully.
    """

    monkeypatch.setenv(environment_name, value)

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_configure_logging_emits_json_records() -> None:
    """Write single-line JSON records to the configured stream.

    Returns:
        None: Assertions validate JSON log payload.

    Raises:
        AssertionError: Raised when log output is not JSON.
    """

    stream = io.StringIO()
    root_logger = logging.getLogger()
    previous_handlers = root_logger.handlers[:]
    previous_level = root_logger.level
    try:
        config_configure_logging(level="warning", json_output=True, stream=stream)
        logging.getLogger("fifo_ledger.test").info("hidden")
        logging.getLogger("fifo_ledger.test").warning("visible %s", "record")
    finally:
        root_logger.handlers[:] = previous_handlers
        root_logger.setLevel(previous_level)

    lines = stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["level"] == "WARNING"
    assert record["logger"] == "fifo_ledger.test"
    assert record["message"] == "visible record"


def test_config_app_settings_accepts_explicit_values() -> None:
    settings = AppSettings(environment_name="ci", api_max_rows=5)

    assert settings.environment_name == "ci"
    assert settings.api_max_rows == 5
