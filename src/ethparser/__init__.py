"""ethparser - Async Ethereum block watcher with per-address transaction indexing."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ethparser")
except PackageNotFoundError:
    __version__ = "0+local"
from ethparser.config import ParserConfig
from ethparser.exceptions import (
    LedgerDecodeError,
    LedgerError,
    LedgerRpcError,
    LedgerTransportError,
    ParserConfigError,
    ParserError,
)
from ethparser.ingestion import CycleOutcome, CycleResult, IngestionEngine
from ethparser.ledger import LedgerClient
from ethparser.models import Block, ChainHead, Transaction
from ethparser.parser import Parser
from ethparser.state import StateStore

__all__ = [
    "__version__",
    "Block",
    "ChainHead",
    "CycleOutcome",
    "CycleResult",
    "IngestionEngine",
    "LedgerClient",
    "LedgerDecodeError",
    "LedgerError",
    "LedgerRpcError",
    "LedgerTransportError",
    "Parser",
    "ParserConfig",
    "ParserConfigError",
    "ParserError",
    "StateStore",
    "Transaction",
]
