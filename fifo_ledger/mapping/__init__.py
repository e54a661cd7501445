"""Mapping layer package for raw trade row normalization."""

from .interfaces import (
    TRADE_ROW_COLUMN_COUNT,
    NormalizedTradeRow,
    RawTradeRow,
    TradeRowColumn,
    TradeRowNormalizerPort,
)
from .service import (
    TradeRowNormalizer,
    mapping_cell_to_text,
    mapping_coerce_decimal,
    mapping_filter_actionable_rows,
    mapping_normalize_trade_row,
)

__all__ = [
    "NormalizedTradeRow",
    "RawTradeRow",
    "TRADE_ROW_COLUMN_COUNT",
    "TradeRowColumn",
    "TradeRowNormalizer",
    "TradeRowNormalizerPort",
    "mapping_cell_to_text",
    "mapping_coerce_decimal",
    "mapping_filter_actionable_rows",
    "mapping_normalize_trade_row",
]
