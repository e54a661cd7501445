"""Normalization of raw trade rows into typed trade records."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable, Sequence

from fifo_ledger.domain import (
    AcquisitionTradeRecord,
    IgnoredTradeRecord,
    InvalidTradeRecordError,
    PositionIdentifier,
    SellTradeRecord,
    SplitTradeRecord,
    TradeRecord,
    domain_parse_split_ratio,
)
from fifo_ledger.domain.trade_records import (
    TRADE_ACQUISITION_ACTIONS,
    TRADE_ACTION_SELL,
    TRADE_ACTION_SPLIT,
    TRADE_SUPPORTED_ACTIONS,
)

from .interfaces import TRADE_ROW_COLUMN_COUNT, NormalizedTradeRow, RawTradeRow, TradeRowColumn


class TradeRowNormalizer:
    """Concrete normalizer for fixed-layout trade rows."""

    def mapping_normalize_rows(self, rows: Sequence[RawTradeRow]) -> list[NormalizedTradeRow]:
        """Filter rows without action and normalize the rest in input order.

        Args:
            rows: Raw rows in chronological order.

        Returns:
            list[NormalizedTradeRow]: Normalized rows.

        Raises:
            InvalidTradeRecordError: Raised when one row cannot be normalized.
        """

        return [mapping_normalize_trade_row(row) for row in mapping_filter_actionable_rows(rows)]


def mapping_filter_actionable_rows(rows: Iterable[RawTradeRow]) -> list[RawTradeRow]:
    """Keep rows whose action-type cell holds a value.

    Args:
        rows: Raw rows in input order.

    Returns:
        list[RawTradeRow]: Rows with a non-blank action type.
    """

    return [row for row in rows if _mapping_action_cell_text(row)]


def mapping_normalize_trade_row(row: RawTradeRow) -> NormalizedTradeRow:
    """Normalize one raw row into identifier and typed trade record.

    Args:
        row: Raw row with the fixed ten-column layout.

    Returns:
        NormalizedTradeRow: Identifier and typed record.

    Raises:
        InvalidTradeRecordError: Raised when row is short, lacks an action, or has non-numeric values.
        InvalidSplitRatioError: Raised when a SPLIT row carries a malformed ratio.
        InvalidIdentifierError: Raised when identifier cells cannot form an encodable key.
    """

    if isinstance(row, (str, bytes)) or len(row) < TRADE_ROW_COLUMN_COUNT:
        raise InvalidTradeRecordError(
            f"trade row must hold {TRADE_ROW_COLUMN_COUNT} cells, got {_mapping_describe_row_length(row)}"
        )

    action_type = _mapping_action_cell_text(row).upper()
    if not action_type:
        raise InvalidTradeRecordError("trade row action type must not be blank", field_name="action_type")

    identifier = PositionIdentifier(
        broker=mapping_cell_to_text(row[TradeRowColumn.BROKER]),
        account=mapping_cell_to_text(row[TradeRowColumn.ACCOUNT]),
        ticker=mapping_cell_to_text(row[TradeRowColumn.TICKER]),
        currency=mapping_cell_to_text(row[TradeRowColumn.CURRENCY]),
        asset_class=mapping_cell_to_text(row[TradeRowColumn.ASSET_CLASS]),
    )
    return NormalizedTradeRow(identifier=identifier, record=_mapping_build_record(action_type, row))


def mapping_cell_to_text(value: object) -> str:
    """Render one identifier cell as text.

    Args:
        value: Raw cell value.

    Returns:
        str: Text form; integral floats drop their `.0` suffix and None becomes empty text.
    """

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def mapping_coerce_decimal(value: object, field_name: str) -> Decimal:
    """Coerce one numeric cell to a finite decimal.

    Args:
        value: Raw cell value.
        field_name: Field name reported in errors.

    Returns:
        Decimal: Parsed value; blank and None cells coerce to zero.

    Raises:
        InvalidTradeRecordError: Raised when value is non-numeric or not finite.
    """

    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise InvalidTradeRecordError(f"{field_name} must be numeric, got bool", field_name=field_name)

    if isinstance(value, Decimal):
        parsed_value = value
    elif isinstance(value, (int, float)):
        parsed_value = Decimal(str(value))
    elif isinstance(value, str):
        normalized_value = value.strip()
        if not normalized_value:
            return Decimal("0")
        try:
            parsed_value = Decimal(normalized_value)
        except InvalidOperation as error:
            raise InvalidTradeRecordError(
                f"{field_name} must be numeric: {value!r}",
                field_name=field_name,
            ) from error
    else:
        raise InvalidTradeRecordError(
            f"{field_name} must be numeric, got {type(value).__name__}",
            field_name=field_name,
        )

    if not parsed_value.is_finite():
        raise InvalidTradeRecordError(f"{field_name} must be finite: {value!r}", field_name=field_name)
    return parsed_value


def _mapping_build_record(action_type: str, row: RawTradeRow) -> TradeRecord:
    """Build the typed record variant for one action type.

    Args:
        action_type: Upper-cased action type.
        row: Raw row.

    Returns:
        TradeRecord: Typed trade record.

    Raises:
        InvalidTradeRecordError: Raised when numeric cells are invalid for an acted-on action.
    """

    raw_quantity = row[TradeRowColumn.QUANTITY]
    raw_unit_price = row[TradeRowColumn.UNIT_PRICE]

    if action_type not in TRADE_SUPPORTED_ACTIONS:
        # Ignored actions never reach a lot queue, so their cells are kept best-effort.
        return IgnoredTradeRecord(
            action_type=action_type,
            unit_price=_mapping_try_coerce_decimal(raw_unit_price),
            quantity=_mapping_try_coerce_decimal(raw_quantity),
        )
    if action_type in TRADE_ACQUISITION_ACTIONS:
        return AcquisitionTradeRecord(
            action_type=action_type,
            unit_price=mapping_coerce_decimal(raw_unit_price, "unit_price"),
            quantity=mapping_coerce_decimal(raw_quantity, "quantity"),
        )
    if action_type == TRADE_ACTION_SELL:
        return SellTradeRecord(
            action_type=action_type,
            unit_price=mapping_coerce_decimal(raw_unit_price, "unit_price"),
            quantity=mapping_coerce_decimal(raw_quantity, "quantity"),
        )
    return SplitTradeRecord(
        action_type=TRADE_ACTION_SPLIT,
        unit_price=mapping_coerce_decimal(raw_unit_price, "unit_price"),
        split_ratio=domain_parse_split_ratio(raw_quantity),
    )


def _mapping_try_coerce_decimal(value: object) -> Decimal | None:
    """Coerce one cell to decimal, returning None when not numeric."""

    try:
        return mapping_coerce_decimal(value, "value")
    except InvalidTradeRecordError:
        return None


def _mapping_action_cell_text(row: RawTradeRow) -> str:
    """Return stripped action-type text or empty text when absent."""

    if isinstance(row, (str, bytes)) or len(row) <= TradeRowColumn.ACTION_TYPE:
        return ""
    value = row[TradeRowColumn.ACTION_TYPE]
    if value is None:
        return ""
    return str(value).strip()


def _mapping_describe_row_length(row: object) -> str:
    """Describe row size for error messages."""

    if isinstance(row, (str, bytes)):
        return type(row).__name__
    return str(len(row))


__all__ = [
    "TradeRowNormalizer",
    "mapping_cell_to_text",
    "mapping_coerce_decimal",
    "mapping_filter_actionable_rows",
    "mapping_normalize_trade_row",
]
