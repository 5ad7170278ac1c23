"""Thread-safe in-memory state store.

All reads and writes run under one lock covering height, subscriptions and
the transaction log together, so readers never observe a height advance
without the transactions recorded for it. The lock is only held around
in-memory work and never across an ``await``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from ethparser.models.transaction import Transaction

_logger = logging.getLogger(__name__)


class StateStore:
    """In-memory store for block height, subscriptions and matched transactions.

    Created once per process with height 0 and nothing subscribed; state is
    discarded on shutdown.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._height = 0
        self._subscribed: set[str] = set()
        self._transactions: dict[str, list[Transaction]] = {}

    # ------------------------------------------------------------------
    # Block height
    # ------------------------------------------------------------------

    def get_height(self) -> int:
        with self._lock:
            return self._height

    def set_height(self, height: int) -> bool:
        """Advance the stored height.

        Returns ``False`` and leaves the height untouched when *height* is
        not strictly greater than the current value.
        """
        if height < 0:
            raise ValueError(f"height must be non-negative, got {height}")
        with self._lock:
            if height <= self._height:
                _logger.debug("Ignoring non-advancing height %d (current %d)", height, self._height)
                return False
            self._height = height
            return True

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, address: str) -> bool:
        """Add *address* to the subscription set. Idempotent; always ``True``."""
        with self._lock:
            self._subscribed.add(address)
        return True

    def is_subscribed(self, address: str) -> bool:
        with self._lock:
            return address in self._subscribed

    def list_subscribed(self) -> frozenset[str]:
        """Snapshot of the subscription set."""
        with self._lock:
            return frozenset(self._subscribed)

    # ------------------------------------------------------------------
    # Transaction log
    # ------------------------------------------------------------------

    def append_transaction(self, address: str, transaction: Transaction) -> None:
        with self._lock:
            self._transactions.setdefault(address, []).append(transaction)

    def get_transactions(self, address: str) -> list[Transaction]:
        """Return a copy of the log for *address* (empty if none recorded)."""
        with self._lock:
            return list(self._transactions.get(address, ()))

    def record_block(self, height: int, matches: Iterable[tuple[str, Transaction]]) -> bool:
        """Append *matches* and advance to *height* in one atomic step.

        Nothing is recorded when *height* does not advance the stored value,
        so a block is ingested at most once even if two cycles race.
        """
        pending = list(matches)
        with self._lock:
            if height <= self._height:
                return False
            for address, transaction in pending:
                self._transactions.setdefault(address, []).append(transaction)
            self._height = height
        return True
