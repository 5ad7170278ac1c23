"""Typed models for ledger replies."""

from ethparser.models._base import HexQuantity, parse_hex_quantity, to_hex_quantity
from ethparser.models.block import Block, ChainHead, decode_block, decode_chain_head
from ethparser.models.transaction import Transaction

__all__ = [
    "Block",
    "ChainHead",
    "HexQuantity",
    "Transaction",
    "decode_block",
    "decode_chain_head",
    "parse_hex_quantity",
    "to_hex_quantity",
]
