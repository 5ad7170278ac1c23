"""Block polling ingestion.

This module owns the poll loop: ask the node for the chain head, and when it
has moved past the stored height fetch that block, filter it against the
subscription set and commit the matches together with the new height.

The loop is never started implicitly. Call :meth:`IngestionEngine.start`
from the composing layer, or drive :meth:`IngestionEngine.run_cycle`
directly in tests.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from ethparser.exceptions import LedgerError
from ethparser.ingestion.match import match_transactions
from ethparser.ledger import LedgerClient
from ethparser.models.transaction import Transaction
from ethparser.state.store import StateStore

_logger = logging.getLogger(__name__)


class CycleOutcome(StrEnum):
    ADVANCED = "advanced"
    UNCHANGED = "unchanged"
    FAILED = "failed"


class CycleResult(BaseModel):
    """Summary of one ingestion cycle."""

    model_config = ConfigDict(frozen=True)

    outcome: CycleOutcome
    height: int | None = None
    matched: int = 0
    skipped_records: int = 0
    error: str | None = None


class IngestionEngine:
    """Polls the ledger and feeds new matches into a :class:`StateStore`.

    Parameters
    ----------
    ledger
        Client used for the chain head and block calls.
    store
        Shared state store; the only place results are written.
    poll_interval
        Seconds to wait after a completed cycle.
    retry_delay
        Seconds to wait after a failed cycle.
    on_match
        Optional hook invoked with ``(address, transaction)`` for every match
        after it has been committed.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        store: StateStore,
        *,
        poll_interval: float = 10.0,
        retry_delay: float = 1.0,
        on_match: Callable[[str, Transaction], None] | None = None,
    ) -> None:
        self._ledger = ledger
        self._store = store
        self._poll_interval = poll_interval
        self._retry_delay = retry_delay
        self._on_match = on_match
        self._task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background poll loop on the running event loop."""
        if self.is_running:
            raise RuntimeError("Ingestion engine already running")
        self._task = asyncio.get_running_loop().create_task(self._run(), name="ethparser-ingestion")
        _logger.info(
            "Ingestion started (poll every %.1fs, retry after %.1fs)",
            self._poll_interval,
            self._retry_delay,
        )

    async def stop(self) -> None:
        """Cancel the poll loop and wait for it to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        _logger.info("Ingestion stopped")

    async def _run(self) -> None:
        while True:
            try:
                result = await self.run_cycle()
            except Exception as exc:
                _logger.exception("Ingestion cycle crashed")
                result = CycleResult(outcome=CycleOutcome.FAILED, error=str(exc))
            delay = self._retry_delay if result.outcome is CycleOutcome.FAILED else self._poll_interval
            await asyncio.sleep(delay)

    # ------------------------------------------------------------------
    # One cycle
    # ------------------------------------------------------------------

    async def run_cycle(self) -> CycleResult:
        """Run a single poll-fetch-filter-store pass.

        Ledger failures end the cycle early and are reported in the result;
        they never propagate.
        """
        try:
            head = await self._ledger.get_chain_head()
        except LedgerError as exc:
            _logger.warning("Fetching chain head failed: %s", exc)
            return CycleResult(outcome=CycleOutcome.FAILED, error=str(exc))

        current = self._store.get_height()
        if head.height <= current:
            _logger.debug("Chain head %d not past stored height %d", head.height, current)
            return CycleResult(outcome=CycleOutcome.UNCHANGED, height=current)

        try:
            block = await self._ledger.get_block(head.height)
        except LedgerError as exc:
            _logger.warning("Fetching block %d failed: %s", head.height, exc)
            return CycleResult(outcome=CycleOutcome.FAILED, height=current, error=str(exc))

        matches = match_transactions(self._store.list_subscribed(), block.transactions)
        if not self._store.record_block(head.height, matches):
            _logger.debug("Block %d already ingested", head.height)
            return CycleResult(outcome=CycleOutcome.UNCHANGED, height=self._store.get_height())

        _logger.info(
            "New block %d: %d transactions, %d matched, %d skipped",
            head.height,
            len(block.transactions),
            len(matches),
            block.skipped_records,
        )
        self._notify(matches)
        return CycleResult(
            outcome=CycleOutcome.ADVANCED,
            height=head.height,
            matched=len(matches),
            skipped_records=block.skipped_records,
        )

    def _notify(self, matches: list[tuple[str, Transaction]]) -> None:
        if self._on_match is None:
            return
        for address, transaction in matches:
            try:
                self._on_match(address, transaction)
            except Exception:
                _logger.warning("on_match hook failed for %s", address, exc_info=True)
