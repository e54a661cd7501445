"""Typed interfaces for ledger-layer computations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from fifo_ledger.mapping import RawTradeRow

    from .position_engine import ResolvedPosition


class PositionEnginePort(Protocol):
    """Port definition for position computations."""

    def ledger_policy_name(self) -> str:
        """Return policy label for the active lot matching strategy.

        Returns:
            str: Lot matching policy identifier.
        """

    def ledger_compute_positions(self, rows: Sequence[RawTradeRow]) -> list[ResolvedPosition]:
        """Compute aggregate positions from chronological raw rows.

        Args:
            rows: Raw ten-column rows.

        Returns:
            list[ResolvedPosition]: Positions in first-appearance order.

        Raises:
            PositionLedgerError: Raised when rows cannot be processed.
        """
