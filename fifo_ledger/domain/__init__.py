"""Domain models and typed errors shared across ledger layers."""

from .errors import (
    InvalidIdentifierError,
    InvalidSplitRatioError,
    InvalidTradeRecordError,
    OversellError,
    PositionLedgerError,
    PositionResolutionError,
)
from .identifier import PositionIdentifier, domain_identifier_decode, domain_identifier_encode
from .trade_records import (
    AcquisitionTradeRecord,
    IgnoredTradeRecord,
    SellTradeRecord,
    SplitTradeRecord,
    TradeRecord,
    domain_parse_split_ratio,
)

__all__ = [
    "AcquisitionTradeRecord",
    "IgnoredTradeRecord",
    "InvalidIdentifierError",
    "InvalidSplitRatioError",
    "InvalidTradeRecordError",
    "OversellError",
    "PositionIdentifier",
    "PositionLedgerError",
    "PositionResolutionError",
    "SellTradeRecord",
    "SplitTradeRecord",
    "TradeRecord",
    "domain_identifier_decode",
    "domain_identifier_encode",
    "domain_parse_split_ratio",
]
