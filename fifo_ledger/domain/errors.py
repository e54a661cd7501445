"""Project-native typed exceptions for position ledger failures."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .identifier import PositionIdentifier


class PositionLedgerError(Exception):
    """Base exception for position ledger failures.

    Attributes:
        error_code: Stable machine-readable error code for API surfaces.
    """

    error_code = "POSITION_LEDGER_ERROR"


class InvalidIdentifierError(PositionLedgerError, ValueError):
    """Identifier attribute or token cannot satisfy the composite-key contract."""

    error_code = "INVALID_IDENTIFIER"


class InvalidTradeRecordError(PositionLedgerError, ValueError):
    """Raw trade row cannot be coerced into a typed trade record.

    Attributes:
        field_name: Optional name of the offending row field.
    """

    error_code = "INVALID_TRADE_RECORD"

    def __init__(self, message: str, field_name: str | None = None):
        super().__init__(message)
        self.field_name = field_name


class InvalidSplitRatioError(InvalidTradeRecordError):
    """Split ratio is not a two-part positive `N:D` value.

    Attributes:
        raw_ratio: Raw ratio value as received.
    """

    error_code = "INVALID_SPLIT_RATIO"

    def __init__(self, message: str, raw_ratio: object | None = None):
        super().__init__(message=message, field_name="quantity")
        self.raw_ratio = raw_ratio


class OversellError(PositionLedgerError, RuntimeError):
    """Sell quantity exceeds the open quantity available for one identifier.

    Attributes:
        identifier: Identifier whose lot queue was exhausted, when known.
        requested_quantity: Quantity requested by the sell record.
        shortfall_quantity: Quantity left unmatched after all lots were consumed.
    """

    error_code = "OVERSELL"

    def __init__(
        self,
        identifier: PositionIdentifier | None,
        requested_quantity: Decimal,
        shortfall_quantity: Decimal,
    ):
        super().__init__(
            f"oversell for identifier={identifier}: requested={requested_quantity} "
            f"shortfall={shortfall_quantity}"
        )
        self.identifier = identifier
        self.requested_quantity = requested_quantity
        self.shortfall_quantity = shortfall_quantity


class PositionResolutionError(PositionLedgerError, RuntimeError):
    """Lot queue cannot be resolved into an aggregate position."""

    error_code = "POSITION_RESOLUTION"
