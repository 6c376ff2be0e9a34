"""Persistence and output sinks for the ledger."""

from loan_tracker.sinks.console import ConsoleSink
from loan_tracker.sinks.json_store import JsonLedgerStore

__all__ = ["ConsoleSink", "JsonLedgerStore"]
