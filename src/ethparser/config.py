"""Runtime configuration for ethparser."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from ethparser._constants import DEFAULT_RPC_URL
from ethparser.exceptions import ParserConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(value)
    except ValueError as exc:
        raise ParserConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ParserConfig:
    """Parser configuration.

    Parameters
    ----------
    rpc_url : str
        JSON-RPC endpoint of the Ethereum node to poll.
    poll_interval : float
        Seconds between two ingestion cycles.
    retry_delay : float
        Fixed back-off in seconds after a failed cycle.
    request_timeout : float
        Total timeout in seconds for a single remote call.
    host : str
        Bind address of the HTTP query interface.
    port : int
        Bind port of the HTTP query interface.
    rpc_trace_enabled : bool
        Log compacted request/reply bodies at DEBUG level.
    """

    rpc_url: str = DEFAULT_RPC_URL
    poll_interval: float = 10.0
    retry_delay: float = 1.0
    request_timeout: float = 15.0
    host: str = "127.0.0.1"
    port: int = 8080
    rpc_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.rpc_url:
            raise ParserConfigError("rpc_url must be non-empty")
        if self.poll_interval <= 0:
            raise ParserConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.retry_delay < 0:
            raise ParserConfigError(f"retry_delay must not be negative, got {self.retry_delay}")
        if self.request_timeout <= 0:
            raise ParserConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if not 0 <= self.port <= 65535:
            raise ParserConfigError(f"port out of range: {self.port}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ParserConfig:
        """Create configuration from ``ETHPARSER_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        for env_key, field_name in (("ETHPARSER_RPC_URL", "rpc_url"), ("ETHPARSER_HOST", "host")):
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "ETHPARSER_POLL_INTERVAL": ("poll_interval", float),
            "ETHPARSER_RETRY_DELAY": ("retry_delay", float),
            "ETHPARSER_REQUEST_TIMEOUT": ("request_timeout", float),
            "ETHPARSER_PORT": ("port", int),
        }
        for env_key, (field_name, kind) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, kind)

        if "rpc_trace_enabled" not in overrides:
            config_kwargs["rpc_trace_enabled"] = _env_bool(env.get("ETHPARSER_RPC_TRACE"), False)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
