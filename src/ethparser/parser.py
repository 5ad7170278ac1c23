"""Query facade over the state store."""

from __future__ import annotations

import logging

from ethparser.ingestion.match import match_transactions
from ethparser.ledger import LedgerClient
from ethparser.models.transaction import Transaction
from ethparser.state.store import StateStore

_logger = logging.getLogger(__name__)


class Parser:
    """Subscribe to addresses and read back what ingestion has recorded.

    The facade holds no state of its own; it reads and writes the shared
    :class:`StateStore`. The optional *ledger* is only needed for
    :meth:`fetch_block_transactions`.
    """

    def __init__(self, store: StateStore, ledger: LedgerClient | None = None) -> None:
        self._store = store
        self._ledger = ledger

    def get_current_block(self) -> int:
        """Last block height ingested."""
        return self._store.get_height()

    def subscribe(self, address: str) -> bool:
        """Register interest in *address*. Returns ``False`` for an empty address."""
        if not address:
            return False
        self._store.subscribe(address)
        _logger.info("Subscribed to %s", address)
        return True

    def get_transactions(self, address: str) -> list[Transaction]:
        """Transactions recorded for *address* so far, in block order."""
        return self._store.get_transactions(address)

    async def fetch_block_transactions(self, address: str, height: int | None = None) -> list[Transaction]:
        """Fetch one block directly and return the transactions touching *address*.

        Defaults to the current stored height. Nothing is written to the
        store. Ledger errors propagate to the caller.
        """
        if self._ledger is None:
            raise RuntimeError("Parser was created without a ledger client")
        if height is None:
            height = self._store.get_height()
        block = await self._ledger.get_block(height)
        return [tx for _, tx in match_transactions({address}, block.transactions)]
