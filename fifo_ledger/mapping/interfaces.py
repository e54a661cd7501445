"""Typed interfaces for raw trade row normalization."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, Sequence

from fifo_ledger.domain import PositionIdentifier, TradeRecord


class TradeRowColumn(IntEnum):
    """Fixed column layout of one raw trade row."""

    BROKER = 0
    ACCOUNT = 1
    DATE = 2
    TICKER = 3
    ACTION_TYPE = 4
    QUANTITY = 5
    UNIT_PRICE = 6
    BOOK_COST = 7
    CURRENCY = 8
    ASSET_CLASS = 9


TRADE_ROW_COLUMN_COUNT = len(TradeRowColumn)

RawTradeRow = Sequence[object]


@dataclass(frozen=True)
class NormalizedTradeRow:
    """Normalized trade row ready for lot queue dispatch.

    Attributes:
        identifier: Composite position identifier.
        record: Typed trade record.
    """

    identifier: PositionIdentifier
    record: TradeRecord


class TradeRowNormalizerPort(Protocol):
    """Port definition for raw-row to trade-record normalization."""

    def mapping_normalize_rows(self, rows: Sequence[RawTradeRow]) -> list[NormalizedTradeRow]:
        """Normalize actionable rows in input order.

        Args:
            rows: Raw rows in chronological order.

        Returns:
            list[NormalizedTradeRow]: Normalized rows, rows without action removed.

        Raises:
            InvalidTradeRecordError: Raised when one row cannot be normalized.
        """
