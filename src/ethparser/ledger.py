"""Ledger client: the single remote-call primitive plus typed wrappers."""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from typing import Any

from ethparser._constants import JSONRPC_VERSION, METHOD_BLOCK_NUMBER, METHOD_GET_BLOCK_BY_NUMBER
from ethparser._transport import Transport
from ethparser.exceptions import LedgerDecodeError, LedgerRpcError
from ethparser.models import Block, ChainHead, decode_block, decode_chain_head, to_hex_quantity


class LedgerClient:
    """JSON-RPC client for an Ethereum node.

    Usage::

        client = LedgerClient(transport)
        head = await client.get_chain_head()
        block = await client.get_block(head.height)
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._ids = itertools.count(1)

    async def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        """Perform one remote call and return the envelope's ``result`` field.

        Raises
        ------
        LedgerTransportError
            The transport failed or the reply was not JSON.
        LedgerRpcError
            The reply carried an ``error`` object.
        LedgerDecodeError
            The reply was not an envelope or carried no ``result``.
        """
        payload = {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "params": list(params),
            "id": next(self._ids),
        }
        reply = await self._transport.post_json(payload)

        if not isinstance(reply, dict):
            raise LedgerDecodeError(f"{method} reply is not a JSON object", method=method)

        error = reply.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            raise LedgerRpcError(
                f"{method} failed: code={code} message={message}",
                method=method,
                code=code if isinstance(code, int) else None,
            )

        if "result" not in reply:
            raise LedgerDecodeError(f"{method} reply carries no result", method=method)
        return reply["result"]

    async def get_chain_head(self) -> ChainHead:
        """Fetch the current chain head height."""
        result = await self.call(METHOD_BLOCK_NUMBER)
        return decode_chain_head(result)

    async def get_block(self, height: int) -> Block:
        """Fetch a block with full transaction objects."""
        result = await self.call(METHOD_GET_BLOCK_BY_NUMBER, (to_hex_quantity(height), True))
        block = decode_block(result)
        if block.number != height:
            raise LedgerDecodeError(
                f"{METHOD_GET_BLOCK_BY_NUMBER} returned block {block.number}, expected {height}",
                method=METHOD_GET_BLOCK_BY_NUMBER,
            )
        return block
