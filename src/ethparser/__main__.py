"""Command line entry point: ``python -m ethparser``."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Any

from aiohttp import web

from ethparser.config import ParserConfig
from ethparser.server import create_app


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ethparser",
        description="Watch an Ethereum node and serve transactions for subscribed addresses.",
    )
    parser.add_argument("--rpc-url", help="JSON-RPC endpoint (env: ETHPARSER_RPC_URL)")
    parser.add_argument("--host", help="bind address (env: ETHPARSER_HOST)")
    parser.add_argument("--port", type=int, help="bind port (env: ETHPARSER_PORT)")
    parser.add_argument("--poll-interval", type=float, help="seconds between polls (env: ETHPARSER_POLL_INTERVAL)")
    parser.add_argument("--retry-delay", type=float, help="back-off after a failed poll (env: ETHPARSER_RETRY_DELAY)")
    parser.add_argument("--rpc-trace", action="store_true", default=None, help="log RPC bodies at DEBUG")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: INFO)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {
        "rpc_url": args.rpc_url,
        "host": args.host,
        "port": args.port,
        "poll_interval": args.poll_interval,
        "retry_delay": args.retry_delay,
        "rpc_trace_enabled": args.rpc_trace,
    }
    config = ParserConfig.from_env(**{k: v for k, v in overrides.items() if v is not None})

    logging.getLogger(__name__).info("Polling %s, serving on %s:%d", config.rpc_url, config.host, config.port)
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)


if __name__ == "__main__":
    main()
