"""Regression tests for FIFO lot queue primitives."""

from __future__ import annotations

from decimal import Decimal

import pytest

from fifo_ledger.domain import (
    AcquisitionTradeRecord,
    InvalidTradeRecordError,
    OversellError,
    PositionIdentifier,
    SellTradeRecord,
    SplitTradeRecord,
)
from fifo_ledger.ledger import (
    FifoLot,
    ledger_format_decimal,
    ledger_queue_apply_buy,
    ledger_queue_apply_sell,
    ledger_queue_apply_split,
    ledger_round_quantity,
)


def _lot(quantity: str, unit_price: str) -> FifoLot:
    return FifoLot(quantity=Decimal(quantity), unit_price=Decimal(unit_price))


def _buy(quantity: str, unit_price: str, action_type: str = "BUY") -> AcquisitionTradeRecord:
    return AcquisitionTradeRecord(action_type=action_type, unit_price=Decimal(unit_price), quantity=Decimal(quantity))


def _sell(quantity: str) -> SellTradeRecord:
    return SellTradeRecord(action_type="SELL", unit_price=Decimal("99"), quantity=Decimal(quantity))


def _split(numerator: str, denominator: str) -> SplitTradeRecord:
    return SplitTradeRecord(action_type="SPLIT", unit_price=Decimal("0"), split_ratio=(numerator, denominator))


def test_ledger_queue_apply_buy_appends_lot_at_tail() -> None:
    """Append acquisitions in arrival order for empty and non-empty queues.

    Returns:
        None: Assertions validate appended lots.

    Raises:
        AssertionError: Raised when lots are not appended at the tail.
    """

    queue = ledger_queue_apply_buy((), _buy("10", "5"))
    queue = ledger_queue_apply_buy(queue, _buy("2", "6", action_type="DRIP"))

    assert queue == (_lot("10", "5"), _lot("2", "6"))


def test_ledger_queue_apply_buy_skips_zero_and_rejects_negative_quantities() -> None:
    queue = (_lot("1", "1"),)

    assert ledger_queue_apply_buy(queue, _buy("0", "5")) == queue
    with pytest.raises(InvalidTradeRecordError):
        ledger_queue_apply_buy(queue, _buy("-1", "5"))
    with pytest.raises(InvalidTradeRecordError):
        ledger_queue_apply_buy(queue, _buy("1", "-5"))


def test_ledger_queue_apply_split_rescales_every_lot() -> None:
    """Rescale quantity up and price down for a forward split.

    Returns:
        None: Assertions validate rescaled lots.

    Raises:
        AssertionError: Raised when split rescaling deviates.
    """

    queue = (_lot("10", "10"), _lot("4", "12"))

    assert ledger_queue_apply_split(queue, _split("2", "1")) == (_lot("20", "5"), _lot("8", "6"))
    assert ledger_queue_apply_split(queue, _split("1", "2")) == (_lot("5", "20"), _lot("2", "24"))


@pytest.mark.parametrize(("numerator", "denominator"), [("2", "1"), ("3", "2"), ("1", "3"), ("7", "3")])
def test_ledger_queue_apply_split_preserves_lot_cost(numerator: str, denominator: str) -> None:
    """Keep quantity times unit price invariant within decimal tolerance.

    Returns:
        None: Assertions validate cost conservation.

    Raises:
        AssertionError: Raised when split changes lot cost.
    """

    queue = (_lot("7", "13.3"), _lot("0.5", "101.07"))

    split_queue = ledger_queue_apply_split(queue, _split(numerator, denominator))

    for original_lot, split_lot in zip(queue, split_queue):
        assert abs(split_lot.lot_cost() - original_lot.lot_cost()) < Decimal("1e-20")


def test_ledger_queue_apply_sell_consumes_lots_in_fifo_order() -> None:
    """Consume the earliest lot first and keep the partial head price.

    Returns:
        None: Assertions validate remaining lots.

    Raises:
        AssertionError: Raised when sell matching is not FIFO.
    """

    queue = (_lot("10", "5"), _lot("10", "7"), _lot("3", "9"))

    assert ledger_queue_apply_sell(queue, _sell("15")) == (_lot("5", "7"), _lot("3", "9"))
    assert ledger_queue_apply_sell(queue, _sell("4")) == (_lot("6", "5"), _lot("10", "7"), _lot("3", "9"))


def test_ledger_queue_apply_sell_removes_exactly_matched_lots() -> None:
    queue = (_lot("10", "5"), _lot("10", "7"))

    assert ledger_queue_apply_sell(queue, _sell("10")) == (_lot("10", "7"),)
    assert ledger_queue_apply_sell(queue, _sell("20")) == ()


def test_ledger_queue_apply_sell_compares_quantities_after_rounding() -> None:
    """Treat quantities equal at five decimal places as an exact match.

    Returns:
        None: Assertions validate rounding tolerance on sell matching.

    Raises:
        AssertionError: Raised when near-equal quantities leave residual lots.
    """

    queue = (_lot("0.300000000004", "10"), _lot("1", "11"))

    assert ledger_queue_apply_sell(queue, _sell("0.3")) == (_lot("1", "11"),)
    assert ledger_queue_apply_sell((_lot("1.0000049", "10"),), _sell("1")) == ()


def test_ledger_queue_apply_sell_raises_oversell_with_shortfall() -> None:
    """Raise typed oversell error when lots run out before the sell is matched.

    Returns:
        None: Assertions validate oversell attributes.

    Raises:
        AssertionError: Raised when oversell is not surfaced.
    """

    identifier = PositionIdentifier(broker="IB", account="U1", ticker="MSFT", currency="USD", asset_class="Stock")

    with pytest.raises(OversellError) as error_info:
        ledger_queue_apply_sell((_lot("10", "5"), _lot("2", "6")), _sell("15"), identifier=identifier)

    assert error_info.value.identifier == identifier
    assert error_info.value.requested_quantity == Decimal("15")
    assert error_info.value.shortfall_quantity == Decimal("3")

    with pytest.raises(OversellError):
        ledger_queue_apply_sell((), _sell("1"))


def test_ledger_queue_apply_sell_handles_zero_and_negative_quantities() -> None:
    assert ledger_queue_apply_sell((), _sell("0")) == ()
    assert ledger_queue_apply_sell((_lot("2", "3"),), _sell("0")) == (_lot("2", "3"),)
    with pytest.raises(InvalidTradeRecordError):
        ledger_queue_apply_sell((_lot("2", "3"),), _sell("-1"))


def test_ledger_queue_apply_sell_honours_configured_precision() -> None:
    queue = (_lot("1.04", "10"),)

    assert ledger_queue_apply_sell(queue, _sell("1"), quantity_precision_places=1) == ()
    assert ledger_round_quantity(Decimal("2.000005")) == Decimal("2.00001")


@pytest.mark.parametrize(
    ("quantity", "places"),
    [("1e24", 5), ("1e17", 12)],
)
def test_ledger_queue_apply_sell_rejects_quantities_beyond_rounding_precision(quantity: str, places: int) -> None:
    """Raise a typed record error when a quantity cannot be rounded in decimal context.

    Returns:
        None: Assertions validate the raised error.

    Raises:
        AssertionError: Raised when an untyped decimal error escapes.
    """

    queue = ledger_queue_apply_buy((), _buy(quantity, "1"))

    with pytest.raises(InvalidTradeRecordError) as error_info:
        ledger_queue_apply_sell(queue, _sell("1"), quantity_precision_places=places)

    assert error_info.value.field_name == "quantity"
    assert error_info.value.error_code == "INVALID_TRADE_RECORD"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("5.00000"), "5"),
        (Decimal("1e2"), "100"),
        (Decimal("0.25000"), "0.25"),
        (Decimal("1.5E-7"), "0.00000015"),
        (Decimal("-0.000"), "0"),
        (Decimal("0"), "0"),
    ],
)
def test_ledger_format_decimal_renders_plain_notation(value: Decimal, expected: str) -> None:
    assert ledger_format_decimal(value) == expected
