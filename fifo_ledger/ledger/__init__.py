"""Ledger layer package for FIFO lot queues and position resolution."""

from .interfaces import PositionEnginePort
from .lot_queue import (
	FifoLot,
	LotQueue,
	ledger_format_decimal,
	ledger_queue_apply_buy,
	ledger_queue_apply_sell,
	ledger_queue_apply_split,
	ledger_round_quantity,
)
from .position_engine import (
	LotQueueBook,
	PositionEngine,
	PositionEngineConfig,
	ResolvedPosition,
	ledger_apply_record,
	ledger_compute_lot_queues,
	ledger_compute_positions,
	ledger_prune_empty_queues,
	ledger_resolve_positions,
)

__all__ = [
	"FifoLot",
	"LotQueue",
	"LotQueueBook",
	"PositionEngine",
	"PositionEngineConfig",
	"PositionEnginePort",
	"ResolvedPosition",
	"ledger_apply_record",
	"ledger_compute_lot_queues",
	"ledger_compute_positions",
	"ledger_format_decimal",
	"ledger_prune_empty_queues",
	"ledger_queue_apply_buy",
	"ledger_queue_apply_sell",
	"ledger_queue_apply_split",
	"ledger_resolve_positions",
	"ledger_round_quantity",
]
