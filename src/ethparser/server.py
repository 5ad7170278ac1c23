"""HTTP query interface and process composition.

The handlers translate requests into :class:`~ethparser.parser.Parser` calls
and hold no state. :func:`create_app` wires one store, one ledger client, the
ingestion engine and the facade together; the engine and the outbound HTTP
session live for the lifetime of the application.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from aiohttp import web

from ethparser._transport import HttpTransport, Transport
from ethparser.config import ParserConfig
from ethparser.exceptions import LedgerError
from ethparser.ingestion.engine import IngestionEngine
from ethparser.ledger import LedgerClient
from ethparser.parser import Parser
from ethparser.state.store import StateStore

_logger = logging.getLogger(__name__)

PARSER_KEY = web.AppKey("parser", Parser)
ENGINE_KEY = web.AppKey("engine", IngestionEngine)


def _bad_request(message: str) -> web.Response:
    return web.json_response({"error": message}, status=400)


async def handle_subscribe(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return _bad_request("body must be JSON")
    address = body.get("address") if isinstance(body, dict) else None
    if not isinstance(address, str) or not address:
        return _bad_request("address is required")

    success = request.app[PARSER_KEY].subscribe(address)
    return web.json_response({"success": success})


async def handle_get_transactions(request: web.Request) -> web.Response:
    address = request.query.get("address", "")
    if not address:
        return _bad_request("address is required")

    transactions = request.app[PARSER_KEY].get_transactions(address)
    return web.json_response([tx.to_wire() for tx in transactions])


async def handle_get_current_block(request: web.Request) -> web.Response:
    return web.json_response({"currentBlock": request.app[PARSER_KEY].get_current_block()})


async def handle_block_transactions(request: web.Request) -> web.Response:
    address = request.query.get("address", "")
    if not address:
        return _bad_request("address is required")
    try:
        height = int(request.match_info["height"])
    except ValueError:
        return _bad_request("height must be an integer")
    if height < 0:
        return _bad_request("height must be non-negative")

    try:
        transactions = await request.app[PARSER_KEY].fetch_block_transactions(address, height)
    except LedgerError as exc:
        _logger.warning("Direct fetch of block %d failed: %s", height, exc)
        return web.json_response({"error": str(exc)}, status=502)
    return web.json_response([tx.to_wire() for tx in transactions])


def create_app(
    config: ParserConfig,
    *,
    transport: Transport | None = None,
    store: StateStore | None = None,
    start_ingestion: bool = True,
) -> web.Application:
    """Build the web application.

    Parameters
    ----------
    transport
        Outbound transport. When omitted an :class:`HttpTransport` bound to
        ``config.rpc_url`` is created and closed on shutdown.
    store
        Shared state store; a fresh one is created when omitted.
    start_ingestion
        Start the background poll loop on startup.
    """
    store = store if store is not None else StateStore()
    owned_transport: HttpTransport | None = None
    if transport is None:
        owned_transport = HttpTransport(
            config.rpc_url,
            timeout=config.request_timeout,
            trace=config.rpc_trace_enabled,
        )
        transport = owned_transport

    ledger = LedgerClient(transport)
    engine = IngestionEngine(
        ledger,
        store,
        poll_interval=config.poll_interval,
        retry_delay=config.retry_delay,
    )

    app = web.Application()
    app[PARSER_KEY] = Parser(store, ledger)
    app[ENGINE_KEY] = engine

    async def _lifecycle(app: web.Application) -> AsyncIterator[None]:
        if start_ingestion:
            engine.start()
        try:
            yield
        finally:
            await engine.stop()
            if owned_transport is not None:
                await owned_transport.close()

    app.cleanup_ctx.append(_lifecycle)
    app.router.add_post("/subscribe", handle_subscribe)
    app.router.add_get("/transactions", handle_get_transactions)
    app.router.add_get("/block", handle_get_current_block)
    app.router.add_get("/blocks/{height}/transactions", handle_block_transactions)
    return app
