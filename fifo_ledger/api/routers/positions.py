"""Positions API router composition for FIFO position computation."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fifo_ledger.config import AppSettings
from fifo_ledger.domain import PositionLedgerError, domain_identifier_encode
from fifo_ledger.ledger import PositionEnginePort, ResolvedPosition, ledger_format_decimal

logger = logging.getLogger(__name__)

_API_STATUS_CONTENT_TOO_LARGE = 413
_API_STATUS_UNPROCESSABLE_CONTENT = 422


class PositionsComputeRequest(BaseModel):
    """Request body for position computation.

    Attributes:
        rows: Raw ten-column trade rows in chronological order.
    """

    rows: list[list[Any]] = Field(default_factory=list)


def api_create_positions_router(
    settings: AppSettings,
    position_engine: PositionEnginePort,
) -> APIRouter:
    """Create positions router exposing the FIFO computation endpoint.

    Args:
        settings: Runtime settings used for request limits.
        position_engine: Ledger-layer position engine.

    Returns:
        APIRouter: Router exposing `/positions` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if position_engine is None:
        raise ValueError("position_engine must not be None")

    router = APIRouter(prefix="/positions", tags=["positions"])

    @router.post("")
    def api_positions_compute(request: PositionsComputeRequest) -> JSONResponse:
        """Compute FIFO positions from submitted rows.

        Args:
            request: Raw rows payload.

        Returns:
            JSONResponse: Position list envelope or typed error payload.
        """

        if len(request.rows) > settings.api_max_rows:
            logger.warning("rejected positions request rows=%d max_rows=%d", len(request.rows), settings.api_max_rows)
            payload = {
                "status": "error",
                "code": "TOO_MANY_ROWS",
                "message": f"rows={len(request.rows)} exceeds api_max_rows={settings.api_max_rows}",
            }
            return JSONResponse(content=payload, status_code=_API_STATUS_CONTENT_TOO_LARGE)

        try:
            positions = position_engine.ledger_compute_positions(request.rows)
        except PositionLedgerError as error:
            logger.warning("rejected positions request code=%s detail=%s", error.error_code, error)
            payload = {
                "status": "error",
                "code": error.error_code,
                "message": str(error),
            }
            return JSONResponse(content=payload, status_code=_API_STATUS_UNPROCESSABLE_CONTENT)

        payload = {
            "policy": position_engine.ledger_policy_name(),
            "items": [api_serialize_resolved_position(position) for position in positions],
            "count": len(positions),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_resolved_position(position: ResolvedPosition) -> dict[str, object]:
    """Serialize one resolved position to JSON payload.

    Args:
        position: Resolved position.

    Returns:
        dict[str, object]: JSON-serializable position payload with decimal strings.

    Raises:
        InvalidIdentifierError: Raised when identifier cannot be encoded.
    """

    return {
        "identifier": domain_identifier_encode(position.identifier),
        "broker": position.identifier.broker,
        "account": position.identifier.account,
        "ticker": position.identifier.ticker,
        "currency": position.identifier.currency,
        "asset_class": position.identifier.asset_class,
        "total_quantity": ledger_format_decimal(position.total_quantity),
        "average_unit_price": ledger_format_decimal(position.average_unit_price),
    }


__all__ = ["PositionsComputeRequest", "api_create_positions_router", "api_serialize_resolved_position"]
