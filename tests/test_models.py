from __future__ import annotations

import pytest
from pydantic import ValidationError

from ethparser.exceptions import LedgerDecodeError
from ethparser.models import (
    Transaction,
    decode_block,
    decode_chain_head,
    parse_hex_quantity,
    to_hex_quantity,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0x4b7", 1207), ("0X4B7", 1207), ("0x0", 0), ("0x10", 16)],
)
def test_parse_hex_quantity_accepts_prefixed_hex(raw: str, expected: int) -> None:
    assert parse_hex_quantity(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "0x", "4b7", "0xzz", "1207", " 0x10 ", "0x10\n", None, 1.5, True, -1, 1207],
)
def test_parse_hex_quantity_rejects_everything_else(raw: object) -> None:
    with pytest.raises(ValueError):
        parse_hex_quantity(raw)


def test_to_hex_quantity() -> None:
    assert to_hex_quantity(1207) == "0x4b7"
    assert to_hex_quantity(0) == "0x0"
    with pytest.raises(ValueError):
        to_hex_quantity(-1)


def test_transaction_uses_wire_keys_and_structural_equality() -> None:
    a = Transaction.model_validate({"from": "0xabc", "to": "0x123", "value": "100", "gas": "0x5208"})
    b = Transaction(from_="0xabc", to="0x123", value="100")

    assert a == b
    assert hash(a) == hash(b)
    assert a.to_wire() == {"from": "0xabc", "to": "0x123", "value": "100"}


def test_transaction_is_immutable() -> None:
    transaction = Transaction(from_="0xabc", to="0x123", value="100")
    with pytest.raises(ValidationError):
        transaction.value = "200"  # type: ignore[misc]


def test_decode_chain_head() -> None:
    assert decode_chain_head("0x4b7").height == 1207


@pytest.mark.parametrize("raw", [None, "latest", 1207, {"number": "0x1"}, []])
def test_decode_chain_head_rejects_non_hex(raw: object) -> None:
    with pytest.raises(LedgerDecodeError) as excinfo:
        decode_chain_head(raw)
    assert excinfo.value.method == "eth_blockNumber"


def test_decode_block_skips_malformed_records_and_keeps_order() -> None:
    block = decode_block(
        {
            "number": "0x4b7",
            "hash": "0xbeef",
            "transactions": [
                {"from": "0x1", "to": "0x2", "value": "0x10"},
                "0xdeadbeef",
                {"from": "0x3", "to": None, "value": "0x0"},
                {"from": "0x4", "value": "0x0"},
                {"from": "0x5", "to": "0x6", "value": 7},
                {"from": "0x7", "to": "0x8", "value": "0x20"},
            ],
        }
    )

    assert block.number == 1207
    assert block.hash == "0xbeef"
    assert [t.from_ for t in block.transactions] == ["0x1", "0x7"]
    assert block.skipped_records == 4


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "0x4b7",
        {"number": "0x4b7"},
        {"number": "0x4b7", "transactions": "nope"},
        {"number": "not-hex", "transactions": []},
        {"number": 1207, "transactions": []},
    ],
)
def test_decode_block_rejects_bad_envelope(raw: object) -> None:
    with pytest.raises(LedgerDecodeError):
        decode_block(raw)
