"""Health endpoint router composition."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from fifo_ledger.ledger import PositionEnginePort


def api_create_health_router(position_engine: PositionEnginePort) -> APIRouter:
    """Create health-check router reporting application and engine state.

    Args:
        position_engine: Ledger-layer position engine.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when position_engine is invalid.
    """

    if position_engine is None:
        raise ValueError("position_engine must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "policy": position_engine.ledger_policy_name(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
