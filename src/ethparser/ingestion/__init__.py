"""Ingestion layer.

This package owns the poll loop that pulls new blocks from the ledger and
the filtering step that picks out transactions for subscribed addresses.
Results are written only through the state store.
"""

from ethparser.ingestion.engine import CycleOutcome, CycleResult, IngestionEngine
from ethparser.ingestion.match import match_transactions

__all__ = ["CycleOutcome", "CycleResult", "IngestionEngine", "match_transactions"]
