"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from fifo_ledger.api import create_api_application
from fifo_ledger.config import AppSettings, config_load_settings
from fifo_ledger.ledger import PositionEngine, PositionEngineConfig


def bootstrap_create_position_engine(settings: AppSettings | None = None) -> PositionEngine:
    """Build the position engine from validated settings.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        PositionEngine: Configured FIFO position engine.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return PositionEngine(
        config=PositionEngineConfig(
            quantity_precision_places=resolved_settings.ledger_quantity_precision_places,
        )
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return create_api_application(
        settings=resolved_settings,
        position_engine=bootstrap_create_position_engine(resolved_settings),
    )
