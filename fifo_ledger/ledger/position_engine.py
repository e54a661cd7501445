"""FIFO position computation from chronological trade rows.

The engine folds normalized trade records into one lot queue per identifier,
prunes liquidated identifiers and resolves every surviving queue into one
aggregate position. Records are processed strictly in input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from fifo_ledger.domain import (
    AcquisitionTradeRecord,
    IgnoredTradeRecord,
    PositionIdentifier,
    PositionResolutionError,
    SellTradeRecord,
    SplitTradeRecord,
    TradeRecord,
)
from fifo_ledger.mapping import NormalizedTradeRow, RawTradeRow, TradeRowNormalizer, TradeRowNormalizerPort

from .lot_queue import (
    LEDGER_DEFAULT_QUANTITY_PRECISION_PLACES,
    LotQueue,
    ledger_queue_apply_buy,
    ledger_queue_apply_sell,
    ledger_queue_apply_split,
    ledger_queue_total_cost,
    ledger_queue_total_quantity,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionEngineConfig:
    """Configuration for FIFO position computation.

    Attributes:
        quantity_precision_places: Decimal places used when comparing sell and lot quantities.
    """

    quantity_precision_places: int = LEDGER_DEFAULT_QUANTITY_PRECISION_PLACES

    def ledger_validate(self) -> None:
        """Validate configuration values.

        Returns:
            None: This method does not return a value.

        Raises:
            ValueError: Raised when precision is outside the supported range.
        """

        if isinstance(self.quantity_precision_places, bool) or not isinstance(self.quantity_precision_places, int):
            raise ValueError("config.quantity_precision_places must be an integer")
        if not 0 <= self.quantity_precision_places <= 12:
            raise ValueError("config.quantity_precision_places must be between 0 and 12")


@dataclass(frozen=True)
class ResolvedPosition:
    """Aggregate position for one identifier.

    Attributes:
        identifier: Composite position identifier.
        total_quantity: Sum of open lot quantities.
        average_unit_price: Quantity-weighted average unit price of open lots.
    """

    identifier: PositionIdentifier
    total_quantity: Decimal
    average_unit_price: Decimal

    def position_to_row(self) -> list[object]:
        """Return the position in output row shape.

        Returns:
            list[object]: Broker, account, ticker, total quantity, average unit price, currency, asset class.
        """

        return [
            self.identifier.broker,
            self.identifier.account,
            self.identifier.ticker,
            self.total_quantity,
            self.average_unit_price,
            self.identifier.currency,
            self.identifier.asset_class,
        ]


class LotQueueBook:
    """Insertion-ordered accumulator mapping identifiers to lot queues."""

    def __init__(self, queues: dict[PositionIdentifier, LotQueue] | None = None):
        self._queues: dict[PositionIdentifier, LotQueue] = dict(queues or {})

    def ledger_queue_get_or_create(self, identifier: PositionIdentifier) -> LotQueue:
        """Return the identifier queue, registering an empty one when absent.

        Args:
            identifier: Position identifier.

        Returns:
            LotQueue: Current queue for the identifier.
        """

        return self._queues.setdefault(identifier, ())

    def ledger_queue_store(self, identifier: PositionIdentifier, queue: LotQueue) -> None:
        """Replace the queue stored for one identifier."""

        self._queues[identifier] = queue

    def ledger_queue_get(self, identifier: PositionIdentifier) -> LotQueue | None:
        """Return the stored queue or None when identifier is unknown."""

        return self._queues.get(identifier)

    def ledger_identifiers(self) -> tuple[PositionIdentifier, ...]:
        """Return identifiers in first-appearance order."""

        return tuple(self._queues)

    def ledger_queue_items(self) -> list[tuple[PositionIdentifier, LotQueue]]:
        """Return identifier and queue pairs in first-appearance order."""

        return list(self._queues.items())

    def __len__(self) -> int:
        return len(self._queues)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._queues


def ledger_apply_record(
    queue: LotQueue,
    record: TradeRecord,
    identifier: PositionIdentifier | None = None,
    config: PositionEngineConfig | None = None,
) -> LotQueue:
    """Apply one trade record to one lot queue.

    Args:
        queue: Current lot queue.
        record: Typed trade record.
        identifier: Optional identifier reported on oversell.
        config: Optional engine configuration.

    Returns:
        LotQueue: Updated queue; unchanged for ignored records.

    Raises:
        OversellError: Raised when a sell exceeds the open quantity.
        InvalidTradeRecordError: Raised when record quantities are invalid.
        TypeError: Raised when record is not a known trade record type.
    """

    resolved_config = config or PositionEngineConfig()

    if isinstance(record, AcquisitionTradeRecord):
        return ledger_queue_apply_buy(queue, record)
    if isinstance(record, SplitTradeRecord):
        return ledger_queue_apply_split(queue, record)
    if isinstance(record, SellTradeRecord):
        return ledger_queue_apply_sell(
            queue,
            record,
            identifier=identifier,
            quantity_precision_places=resolved_config.quantity_precision_places,
        )
    if isinstance(record, IgnoredTradeRecord):
        return queue
    raise TypeError(f"unsupported trade record type={type(record).__name__}")


def ledger_compute_lot_queues(
    normalized_rows: Iterable[NormalizedTradeRow],
    config: PositionEngineConfig | None = None,
) -> LotQueueBook:
    """Fold normalized rows into one lot queue per identifier.

    Args:
        normalized_rows: Normalized rows in chronological order.
        config: Optional engine configuration.

    Returns:
        LotQueueBook: Final lot queues in first-appearance order.

    Raises:
        OversellError: Raised when a sell exceeds the open quantity of its identifier.
        InvalidTradeRecordError: Raised when record quantities are invalid.
    """

    resolved_config = config or PositionEngineConfig()
    resolved_config.ledger_validate()

    book = LotQueueBook()
    for normalized_row in normalized_rows:
        record = normalized_row.record
        if isinstance(record, IgnoredTradeRecord):
            logger.debug(
                "ignoring action_type=%s for identifier=%s",
                record.action_type,
                normalized_row.identifier,
            )
            continue

        queue = book.ledger_queue_get_or_create(normalized_row.identifier)
        book.ledger_queue_store(
            normalized_row.identifier,
            ledger_apply_record(queue, record, identifier=normalized_row.identifier, config=resolved_config),
        )
    return book


def ledger_prune_empty_queues(book: LotQueueBook) -> LotQueueBook:
    """Drop identifiers whose queue holds no lots.

    Args:
        book: Lot queue book after the fold.

    Returns:
        LotQueueBook: New book without liquidated identifiers, order preserved.
    """

    return LotQueueBook({identifier: queue for identifier, queue in book.ledger_queue_items() if len(queue) > 0})


def ledger_resolve_positions(book: LotQueueBook) -> list[ResolvedPosition]:
    """Resolve every queue into total quantity and average unit price.

    Args:
        book: Pruned lot queue book.

    Returns:
        list[ResolvedPosition]: Positions in first-appearance order.

    Raises:
        PositionResolutionError: Raised when one queue has zero total quantity.
    """

    positions: list[ResolvedPosition] = []
    for identifier, queue in book.ledger_queue_items():
        total_quantity = ledger_queue_total_quantity(queue)
        if total_quantity == 0:
            raise PositionResolutionError(f"cannot resolve zero-quantity queue for identifier={identifier}")
        positions.append(
            ResolvedPosition(
                identifier=identifier,
                total_quantity=total_quantity,
                average_unit_price=ledger_queue_total_cost(queue) / total_quantity,
            )
        )
    return positions


class PositionEngine:
    """FIFO position engine over raw trade rows."""

    def __init__(
        self,
        config: PositionEngineConfig | None = None,
        normalizer: TradeRowNormalizerPort | None = None,
    ):
        """Initialize engine dependencies.

        Args:
            config: Optional engine configuration.
            normalizer: Optional raw row normalizer override.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when config values are invalid.
        """

        resolved_config = config or PositionEngineConfig()
        resolved_config.ledger_validate()

        self._config = resolved_config
        self._normalizer = normalizer or TradeRowNormalizer()

    def ledger_policy_name(self) -> str:
        """Return the lot matching policy label."""

        return "fifo"

    def ledger_compute_positions(self, rows: Sequence[RawTradeRow]) -> list[ResolvedPosition]:
        """Compute positions from raw rows in chronological order.

        Args:
            rows: Raw ten-column rows.

        Returns:
            list[ResolvedPosition]: Positions in first-appearance order.

        Raises:
            InvalidTradeRecordError: Raised when one row cannot be normalized.
            InvalidIdentifierError: Raised when identifier cells are not encodable.
            OversellError: Raised when a sell exceeds the open quantity.
        """

        normalized_rows = self._normalizer.mapping_normalize_rows(rows)
        book = ledger_compute_lot_queues(normalized_rows, config=self._config)
        pruned_book = ledger_prune_empty_queues(book)
        positions = ledger_resolve_positions(pruned_book)
        logger.info(
            "computed positions rows=%d actionable=%d identifiers=%d pruned=%d positions=%d",
            len(rows),
            len(normalized_rows),
            len(book),
            len(book) - len(pruned_book),
            len(positions),
        )
        return positions


def ledger_compute_positions(
    rows: Sequence[RawTradeRow],
    config: PositionEngineConfig | None = None,
) -> list[ResolvedPosition]:
    """Compute positions from raw rows with a default-wired engine.

    Args:
        rows: Raw ten-column rows in chronological order.
        config: Optional engine configuration.

    Returns:
        list[ResolvedPosition]: Positions in first-appearance order.

    Raises:
        InvalidTradeRecordError: Raised when one row cannot be normalized.
        OversellError: Raised when a sell exceeds the open quantity.
    """

    return PositionEngine(config=config).ledger_compute_positions(rows)


__all__ = [
    "LotQueueBook",
    "PositionEngine",
    "PositionEngineConfig",
    "ResolvedPosition",
    "ledger_apply_record",
    "ledger_compute_lot_queues",
    "ledger_compute_positions",
    "ledger_prune_empty_queues",
    "ledger_resolve_positions",
]
