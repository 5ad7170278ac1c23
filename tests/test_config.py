from __future__ import annotations

import pytest

from ethparser.config import ParserConfig
from ethparser.exceptions import ParserConfigError


def test_defaults() -> None:
    config = ParserConfig()
    assert config.rpc_url == "https://cloudflare-eth.com"
    assert config.poll_interval == 10.0
    assert config.retry_delay == 1.0
    assert config.port == 8080
    assert config.rpc_trace_enabled is False


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ETHPARSER_RPC_URL", "http://node:8545")
    monkeypatch.setenv("ETHPARSER_POLL_INTERVAL", "2.5")
    monkeypatch.setenv("ETHPARSER_PORT", "9000")
    monkeypatch.setenv("ETHPARSER_RPC_TRACE", "yes")

    config = ParserConfig.from_env()

    assert config.rpc_url == "http://node:8545"
    assert config.poll_interval == 2.5
    assert config.port == 9000
    assert config.rpc_trace_enabled is True


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ETHPARSER_POLL_INTERVAL", "2.5")
    monkeypatch.setenv("ETHPARSER_HOST", "0.0.0.0")

    config = ParserConfig.from_env(poll_interval=30.0, host="localhost")

    assert config.poll_interval == 30.0
    assert config.host == "localhost"


def test_unparseable_env_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ETHPARSER_RETRY_DELAY", "soon")
    with pytest.raises(ParserConfigError):
        ParserConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"poll_interval": 0}, {"retry_delay": -1}, {"request_timeout": 0}, {"port": 70000}, {"rpc_url": ""}],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(ParserConfigError):
        ParserConfig(**kwargs)  # type: ignore[arg-type]
