"""HTTP transport for JSON-RPC requests."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from ethparser._constants import USER_AGENT
from ethparser._logfmt import compact_for_log
from ethparser.exceptions import LedgerTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the ledger client.

    Tests pass in-memory doubles; production uses :class:`HttpTransport`.
    """

    async def post_json(self, payload: Mapping[str, Any]) -> Any:
        ...


class HttpTransport:
    """POSTs JSON bodies to a single node endpoint and returns the decoded reply."""

    def __init__(
        self,
        url: str,
        http_session: aiohttp.ClientSession | None = None,
        *,
        timeout: float = 15.0,
        trace: bool = False,
    ) -> None:
        self._url = url
        self._external_session = http_session is not None
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._trace = trace

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http is None or self._http.closed:
            self._http = aiohttp.ClientSession()
            self._external_session = False
        return self._http

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if not self._external_session and self._http is not None:
            await self._http.close()
        self._http = None

    async def post_json(self, payload: Mapping[str, Any]) -> Any:
        """Send *payload* and return the JSON-decoded response body."""
        method = str(payload.get("method", ""))
        headers = {
            "accept": "application/json",
            "content-type": "application/json",
            "user-agent": USER_AGENT,
        }
        body = json.dumps(payload, separators=(",", ":"))

        if self._trace:
            _logger.debug("POST %s %s", self._url, compact_for_log(payload))

        try:
            async with self._require_session().post(self._url, data=body, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise LedgerTransportError(
                        f"HTTP {resp.status} from {self._url} for {method}: {text[:200]}",
                        method=method,
                        status_code=resp.status,
                    )
        except LedgerTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise LedgerTransportError(
                f"Request {method} to {self._url} timed out",
                method=method,
            ) from exc
        except aiohttp.ClientError as exc:
            raise LedgerTransportError(
                f"Request {method} to {self._url} failed: {exc}",
                method=method,
            ) from exc

        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LedgerTransportError(
                f"Invalid JSON from {self._url} for {method}: {text[:200]}",
                method=method,
            ) from exc

        if self._trace:
            _logger.debug("Reply for %s: %s", method, compact_for_log(decoded))
        return decoded
