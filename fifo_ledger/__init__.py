"""FIFO positions ledger: lot-based position computation from trade history."""
