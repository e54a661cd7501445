"""FIFO lot queue primitives.

A lot queue is an immutable tuple of open lots ordered by acquisition. Every
operation returns a new tuple and leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from fifo_ledger.domain import (
    AcquisitionTradeRecord,
    InvalidTradeRecordError,
    OversellError,
    PositionIdentifier,
    SellTradeRecord,
    SplitTradeRecord,
)

LEDGER_DEFAULT_QUANTITY_PRECISION_PLACES = 5


@dataclass(frozen=True)
class FifoLot:
    """Open purchase tranche at one cost basis.

    Attributes:
        quantity: Open quantity.
        unit_price: Acquisition unit price.
    """

    quantity: Decimal
    unit_price: Decimal

    def lot_cost(self) -> Decimal:
        """Return quantity times unit price."""

        return self.quantity * self.unit_price


LotQueue = tuple[FifoLot, ...]


def ledger_round_quantity(
    quantity: Decimal,
    places: int = LEDGER_DEFAULT_QUANTITY_PRECISION_PLACES,
) -> Decimal:
    """Round one quantity half-up to a fixed number of decimal places.

    Args:
        quantity: Quantity to round.
        places: Decimal places kept.

    Returns:
        Decimal: Rounded quantity.

    Raises:
        InvalidTradeRecordError: Raised when the rounded quantity exceeds decimal context precision.
    """

    try:
        return quantity.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    except InvalidOperation as error:
        raise InvalidTradeRecordError(
            f"quantity too large to round to {places} decimal places: {quantity}",
            field_name="quantity",
        ) from error


def ledger_format_decimal(value: Decimal) -> str:
    """Render one decimal in plain notation without trailing fractional zeros.

    Args:
        value: Quantity or price.

    Returns:
        str: Text such as `5` or `0.25`, never exponent notation.
    """

    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def ledger_queue_apply_buy(queue: LotQueue, record: AcquisitionTradeRecord) -> LotQueue:
    """Append one acquisition lot at the queue tail.

    Args:
        queue: Current lot queue.
        record: BUY or DRIP record.

    Returns:
        LotQueue: Queue with the new lot appended; unchanged for zero quantity.

    Raises:
        InvalidTradeRecordError: Raised when acquisition quantity or price is negative.
    """

    if record.quantity < 0:
        raise InvalidTradeRecordError(
            f"{record.action_type} quantity must not be negative: {record.quantity}",
            field_name="quantity",
        )
    if record.unit_price < 0:
        raise InvalidTradeRecordError(
            f"{record.action_type} unit_price must not be negative: {record.unit_price}",
            field_name="unit_price",
        )
    if record.quantity == 0:
        return queue

    return (*queue, FifoLot(quantity=record.quantity, unit_price=record.unit_price))


def ledger_queue_apply_split(queue: LotQueue, record: SplitTradeRecord) -> LotQueue:
    """Rescale every lot by the split ratio, preserving each lot's cost.

    Args:
        queue: Current lot queue.
        record: SPLIT record.

    Returns:
        LotQueue: Rescaled queue in the same order.

    Raises:
        InvalidSplitRatioError: Raised when the record ratio is malformed.
    """

    numerator, denominator = record.split_ratio_factors()
    quantity_factor = numerator / denominator
    price_factor = denominator / numerator
    return tuple(
        replace(lot, quantity=lot.quantity * quantity_factor, unit_price=lot.unit_price * price_factor)
        for lot in queue
    )


def ledger_queue_apply_sell(
    queue: LotQueue,
    record: SellTradeRecord,
    identifier: PositionIdentifier | None = None,
    quantity_precision_places: int = LEDGER_DEFAULT_QUANTITY_PRECISION_PLACES,
) -> LotQueue:
    """Consume lots from the queue head until the sell quantity is matched.

    Requested and head quantities are rounded before every comparison. A
    partially consumed head keeps its unit price.

    Args:
        queue: Current lot queue.
        record: SELL record.
        identifier: Optional identifier reported on oversell.
        quantity_precision_places: Decimal places used for quantity comparison.

    Returns:
        LotQueue: Remaining queue.

    Raises:
        InvalidTradeRecordError: Raised when sell quantity is negative.
        OversellError: Raised when the queue runs out before the sell is matched.
    """

    requested_quantity = ledger_round_quantity(record.quantity, quantity_precision_places)
    if requested_quantity < 0:
        raise InvalidTradeRecordError(
            f"SELL quantity must not be negative: {record.quantity}",
            field_name="quantity",
        )

    remaining_quantity = requested_quantity
    open_lots = list(queue)
    while open_lots:
        head_lot = open_lots[0]
        head_quantity = ledger_round_quantity(head_lot.quantity, quantity_precision_places)

        if head_quantity == remaining_quantity:
            return tuple(open_lots[1:])
        if head_quantity < remaining_quantity:
            remaining_quantity -= head_quantity
            open_lots.pop(0)
            continue
        return (replace(head_lot, quantity=head_quantity - remaining_quantity), *open_lots[1:])

    if remaining_quantity == 0:
        return ()
    raise OversellError(
        identifier=identifier,
        requested_quantity=requested_quantity,
        shortfall_quantity=remaining_quantity,
    )


def ledger_queue_total_quantity(queue: LotQueue) -> Decimal:
    """Return the sum of open lot quantities."""

    return sum((lot.quantity for lot in queue), Decimal("0"))


def ledger_queue_total_cost(queue: LotQueue) -> Decimal:
    """Return the sum of quantity times unit price over all lots."""

    return sum((lot.lot_cost() for lot in queue), Decimal("0"))


__all__ = [
    "FifoLot",
    "LEDGER_DEFAULT_QUANTITY_PRECISION_PLACES",
    "LotQueue",
    "ledger_format_decimal",
    "ledger_queue_apply_buy",
    "ledger_queue_apply_sell",
    "ledger_queue_apply_split",
    "ledger_queue_total_cost",
    "ledger_queue_total_quantity",
    "ledger_round_quantity",
]
