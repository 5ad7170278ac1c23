from __future__ import annotations

import pytest

from ethparser.exceptions import LedgerTransportError
from ethparser.ledger import LedgerClient
from ethparser.models import Transaction
from ethparser.parser import Parser
from ethparser.state.store import StateStore

from fakes import FakeNode, tx


def test_subscribe_rejects_empty_address() -> None:
    store = StateStore()
    parser = Parser(store)

    assert parser.subscribe("") is False
    assert store.list_subscribed() == frozenset()


def test_subscribe_twice_lists_address_once() -> None:
    store = StateStore()
    parser = Parser(store)

    assert parser.subscribe("0xabc") is True
    assert parser.subscribe("0xabc") is True
    assert store.list_subscribed() == frozenset({"0xabc"})


def test_reads_go_through_shared_store() -> None:
    store = StateStore()
    parser = Parser(store)
    transaction = Transaction(from_="0xabc", to="0x123", value="100")

    store.record_block(42, [("0x123", transaction)])

    assert parser.get_current_block() == 42
    assert parser.get_transactions("0x123") == [transaction]
    assert parser.get_transactions("0xunknown") == []


@pytest.mark.asyncio
async def test_fetch_block_transactions_defaults_to_current_height(node: FakeNode) -> None:
    store = StateStore()
    node.add_block(8, [tx("0xA", "0xB", "0x1"), tx("0xC", "0xD", "0x2"), tx("0xD", "0xA", "0x3")])
    store.set_height(8)
    parser = Parser(store, LedgerClient(node))

    found = await parser.fetch_block_transactions("0xA")

    assert [t.value for t in found] == ["0x1", "0x3"]
    assert store.get_transactions("0xA") == []
    assert node.calls[-1]["params"] == ["0x8", True]


@pytest.mark.asyncio
async def test_fetch_block_transactions_propagates_ledger_errors(node: FakeNode) -> None:
    node.failing_methods.add("eth_getBlockByNumber")
    parser = Parser(StateStore(), LedgerClient(node))
    with pytest.raises(LedgerTransportError):
        await parser.fetch_block_transactions("0xA", 3)


@pytest.mark.asyncio
async def test_fetch_block_transactions_needs_ledger() -> None:
    with pytest.raises(RuntimeError):
        await Parser(StateStore()).fetch_block_transactions("0xA")
