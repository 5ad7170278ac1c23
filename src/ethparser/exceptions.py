"""Custom exception hierarchy for ethparser."""

from __future__ import annotations


class ParserError(Exception):
    """Base exception for all ethparser errors."""


class ParserConfigError(ParserError):
    """Invalid or missing configuration."""


class LedgerError(ParserError):
    """A remote call against the ledger node failed."""

    def __init__(self, message: str, *, method: str = "") -> None:
        self.method = method
        super().__init__(message)


class LedgerTransportError(LedgerError):
    """HTTP-level failure (network, timeout, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, method=method)


class LedgerRpcError(LedgerError):
    """The reply envelope carried a JSON-RPC ``error`` object."""

    def __init__(self, message: str, *, method: str = "", code: int | None = None) -> None:
        self.code = code
        super().__init__(message, method=method)


class LedgerDecodeError(LedgerError):
    """The reply was valid JSON but did not have the expected shape.

    Raised for a missing ``result`` field, a non-hex block number, a
    ``null`` block, or a block body without a transaction list.
    """
