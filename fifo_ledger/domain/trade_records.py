"""Typed trade record contracts consumed by the FIFO lot engine.

Each action type has its own frozen record shape. Dispatch over these shapes is
exhaustive in the ledger layer; `IgnoredTradeRecord` carries every action type
the engine does not act on.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import InvalidSplitRatioError

TRADE_ACTION_BUY = "BUY"
TRADE_ACTION_DRIP = "DRIP"
TRADE_ACTION_SELL = "SELL"
TRADE_ACTION_SPLIT = "SPLIT"

TRADE_ACQUISITION_ACTIONS = frozenset({TRADE_ACTION_BUY, TRADE_ACTION_DRIP})
TRADE_SUPPORTED_ACTIONS = frozenset({TRADE_ACTION_BUY, TRADE_ACTION_DRIP, TRADE_ACTION_SELL, TRADE_ACTION_SPLIT})


@dataclass(frozen=True)
class AcquisitionTradeRecord:
    """BUY or DRIP record that opens a new lot.

    Attributes:
        action_type: `BUY` or `DRIP`.
        unit_price: Acquisition unit price.
        quantity: Acquired quantity.
    """

    action_type: str
    unit_price: Decimal
    quantity: Decimal


@dataclass(frozen=True)
class SellTradeRecord:
    """SELL record matched against open lots in FIFO order.

    Attributes:
        action_type: Always `SELL`.
        unit_price: Sell price, not used for lot matching.
        quantity: Quantity to liquidate.
    """

    action_type: str
    unit_price: Decimal
    quantity: Decimal


@dataclass(frozen=True)
class SplitTradeRecord:
    """SPLIT record rescaling every open lot.

    Attributes:
        action_type: Always `SPLIT`.
        unit_price: Carried from the source row and ignored.
        split_ratio: Numerator and denominator text, `("2", "1")` for a 2:1 split.
    """

    action_type: str
    unit_price: Decimal
    split_ratio: tuple[str, str]

    def split_ratio_factors(self) -> tuple[Decimal, Decimal]:
        """Return validated numeric numerator and denominator.

        Returns:
            tuple[Decimal, Decimal]: Positive finite numerator and denominator.

        Raises:
            InvalidSplitRatioError: Raised when one ratio part is not a positive number.
        """

        return domain_split_ratio_factors(self.split_ratio)


@dataclass(frozen=True)
class IgnoredTradeRecord:
    """Record whose action type has no effect on lot queues.

    Attributes:
        action_type: Upper-cased source action type.
        unit_price: Source unit price when numeric, else None.
        quantity: Source quantity when numeric, else None.
    """

    action_type: str
    unit_price: Decimal | None = None
    quantity: Decimal | None = None


TradeRecord = Union[AcquisitionTradeRecord, SellTradeRecord, SplitTradeRecord, IgnoredTradeRecord]


def domain_parse_split_ratio(raw_ratio: object) -> tuple[str, str]:
    """Parse one colon-delimited split ratio value.

    Args:
        raw_ratio: Raw cell value such as `"2:1"`.

    Returns:
        tuple[str, str]: Stripped numerator and denominator text.

    Raises:
        InvalidSplitRatioError: Raised when value is not a two-part positive ratio.
    """

    if raw_ratio is None:
        raise InvalidSplitRatioError("split ratio must not be empty", raw_ratio=raw_ratio)

    parts = str(raw_ratio).split(":")
    if len(parts) != 2:
        raise InvalidSplitRatioError(f"split ratio must have exactly two parts: {raw_ratio!r}", raw_ratio=raw_ratio)

    split_ratio = (parts[0].strip(), parts[1].strip())
    domain_split_ratio_factors(split_ratio, raw_ratio=raw_ratio)
    return split_ratio


def domain_split_ratio_factors(
    split_ratio: tuple[str, str],
    raw_ratio: object | None = None,
) -> tuple[Decimal, Decimal]:
    """Convert ratio text parts to positive finite decimals.

    Args:
        split_ratio: Numerator and denominator text.
        raw_ratio: Optional original value reported in errors.

    Returns:
        tuple[Decimal, Decimal]: Numerator and denominator.

    Raises:
        InvalidSplitRatioError: Raised when one part is missing, non-numeric or not positive.
    """

    reported_ratio = split_ratio if raw_ratio is None else raw_ratio
    if len(split_ratio) != 2:
        raise InvalidSplitRatioError(
            f"split ratio must have exactly two parts: {reported_ratio!r}",
            raw_ratio=reported_ratio,
        )

    factors: list[Decimal] = []
    for part in split_ratio:
        try:
            factor = Decimal(str(part).strip())
        except InvalidOperation as error:
            raise InvalidSplitRatioError(
                f"split ratio part must be numeric: {reported_ratio!r}",
                raw_ratio=reported_ratio,
            ) from error
        if not factor.is_finite() or factor <= 0:
            raise InvalidSplitRatioError(
                f"split ratio parts must be positive numbers: {reported_ratio!r}",
                raw_ratio=reported_ratio,
            )
        factors.append(factor)

    return factors[0], factors[1]


__all__ = [
    "AcquisitionTradeRecord",
    "IgnoredTradeRecord",
    "SellTradeRecord",
    "SplitTradeRecord",
    "TRADE_ACQUISITION_ACTIONS",
    "TRADE_ACTION_BUY",
    "TRADE_ACTION_DRIP",
    "TRADE_ACTION_SELL",
    "TRADE_ACTION_SPLIT",
    "TRADE_SUPPORTED_ACTIONS",
    "TradeRecord",
    "domain_parse_split_ratio",
    "domain_split_ratio_factors",
]
