"""Pure filtering of block transactions against a subscription set."""

from __future__ import annotations

from collections.abc import Iterable, Set

from ethparser.models.transaction import Transaction


def match_transactions(
    subscribed: Set[str],
    transactions: Iterable[Transaction],
) -> list[tuple[str, Transaction]]:
    """Return ``(address, transaction)`` pairs in block order.

    A transaction is paired once with each distinct subscribed address it
    touches: a transfer between two subscribed addresses yields two pairs,
    a self-transfer yields one.
    """
    if not subscribed:
        return []

    matches: list[tuple[str, Transaction]] = []
    for tx in transactions:
        if tx.from_ in subscribed:
            matches.append((tx.from_, tx))
        if tx.to != tx.from_ and tx.to in subscribed:
            matches.append((tx.to, tx))
    return matches
