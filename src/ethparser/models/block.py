"""Chain-head and block models plus the reply decode step.

Every reply from the ledger client passes through :func:`decode_chain_head`
or :func:`decode_block` before use. Shape problems surface as a single
:class:`~ethparser.exceptions.LedgerDecodeError`; a malformed individual
transaction record is skipped and counted instead.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError

from ethparser._constants import METHOD_BLOCK_NUMBER, METHOD_GET_BLOCK_BY_NUMBER
from ethparser.exceptions import LedgerDecodeError
from ethparser.models._base import EthBaseModel, HexQuantity
from ethparser.models.transaction import Transaction

_logger = logging.getLogger(__name__)


class ChainHead(EthBaseModel):
    """Decoded ``eth_blockNumber`` result."""

    height: HexQuantity = Field(ge=0)


class Block(EthBaseModel):
    """Decoded ``eth_getBlockByNumber`` result (full transaction objects)."""

    number: HexQuantity
    hash: str | None = None
    transactions: tuple[Transaction, ...] = ()
    skipped_records: int = 0


def decode_chain_head(result: Any) -> ChainHead:
    """Decode the chain head from a raw ``result`` value."""
    try:
        return ChainHead(height=result)
    except ValidationError as exc:
        raise LedgerDecodeError(
            f"{METHOD_BLOCK_NUMBER} result is not a hex quantity: {result!r:.64}",
            method=METHOD_BLOCK_NUMBER,
        ) from exc


def _decode_transactions(records: list[Any], block_number: Any) -> tuple[list[Transaction], int]:
    transactions: list[Transaction] = []
    skipped = 0
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            _logger.debug("Block %s: record %d is not an object; skipped", block_number, index)
            skipped += 1
            continue
        try:
            transactions.append(Transaction.model_validate(record))
        except ValidationError as exc:
            _logger.debug(
                "Block %s: malformed transaction record %d skipped (%d errors)",
                block_number,
                index,
                exc.error_count(),
            )
            skipped += 1
    return transactions, skipped


def decode_block(result: Any) -> Block:
    """Decode a block body from a raw ``result`` value.

    The block envelope must be an object with a hex ``number`` and a list of
    ``transactions``; anything else raises :class:`LedgerDecodeError`.
    """
    method = METHOD_GET_BLOCK_BY_NUMBER
    if result is None:
        raise LedgerDecodeError(f"{method} returned no block", method=method)
    if not isinstance(result, dict):
        raise LedgerDecodeError(f"{method} result is not an object", method=method)

    records = result.get("transactions")
    if not isinstance(records, list):
        raise LedgerDecodeError(f"{method} transactions field is not a list", method=method)

    transactions, skipped = _decode_transactions(records, result.get("number"))
    try:
        return Block(
            number=result.get("number"),
            hash=result.get("hash") if isinstance(result.get("hash"), str) else None,
            transactions=tuple(transactions),
            skipped_records=skipped,
        )
    except ValidationError as exc:
        raise LedgerDecodeError(f"{method} block number is not a hex quantity", method=method) from exc
