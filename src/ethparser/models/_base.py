"""Base model and hex-quantity helpers for JSON-RPC payloads.

Ethereum nodes encode every integer quantity as a ``0x``-prefixed
hexadecimal string (``"0x4b7"`` is block 1207). :data:`HexQuantity`
coerces such strings to ``int`` at model-validation time so call sites
never see the wire encoding.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def parse_hex_quantity(value: Any) -> int:
    """Parse a ``0x``-prefixed hex quantity into a non-negative ``int``.

    Raises :class:`ValueError` for anything else (missing prefix, empty
    digits, non-hex characters, non-string input).
    """
    if not isinstance(value, str):
        raise ValueError(f"hex quantity must be a string, got {type(value).__name__}")
    if len(value) < 3 or value[:2].lower() != "0x":
        raise ValueError(f"not a 0x-prefixed hex quantity: {value!r}")
    digits = value[2:]
    if not set(digits) <= _HEX_DIGITS:
        raise ValueError(f"not a 0x-prefixed hex quantity: {value!r}")
    return int(digits, 16)


def to_hex_quantity(value: int) -> str:
    """Encode a non-negative ``int`` as a JSON-RPC quantity string."""
    if value < 0:
        raise ValueError(f"quantity must be non-negative, got {value}")
    return f"0x{value:x}"


HexQuantity = Annotated[int, BeforeValidator(parse_hex_quantity)]
"""Annotated type that coerces ``0x``-prefixed hex strings to ``int``."""


class EthBaseModel(BaseModel):
    """Base for decoded ledger payloads: immutable, tolerant of extra keys."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
