"""Tests for the command line entry point."""

from typing import Any

import pytest

from psiproxy import cli
from psiproxy.config.settings import get_config


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Replace uvicorn.run with a recorder."""
    calls: list[dict[str, Any]] = []

    def fake_run(app: str, **kwargs: Any) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    # Registers LOG_LEVEL with monkeypatch so the CLI's write is undone
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    return calls


def test_defaults_from_config(served: list[dict[str, Any]]):
    cli.main([])
    assert served == [
        {"app": "psiproxy.main:app", "host": "127.0.0.1", "port": 8888, "log_level": "info"}
    ]


def test_log_level_flag_reaches_app_config(served: list[dict[str, Any]]):
    cli.main(["--log-level", "debug", "--port", "9001"])

    assert served[0]["log_level"] == "debug"
    assert served[0]["port"] == 9001
    assert get_config().log_level == "DEBUG"


def test_invalid_log_level_in_env_exits(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LOG_LEVEL", "loud")
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 1
