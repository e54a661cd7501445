"""FastAPI application factory for the position ledger service."""

from fastapi import FastAPI

from fifo_ledger.config import AppSettings
from fifo_ledger.ledger import PositionEnginePort

from .routers import api_create_health_router, api_create_positions_router


def create_api_application(settings: AppSettings, position_engine: PositionEnginePort) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        position_engine: Position engine used by computation endpoints.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """
    application = FastAPI(title="FIFO Positions Ledger")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Service identification payload.
        """

        return {
            "service": "fifo-positions-ledger",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(position_engine=position_engine))
    application.include_router(api_create_positions_router(settings=settings, position_engine=position_engine))

    return application
