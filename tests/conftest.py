"""Pytest fixtures for PSI proxy tests."""

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from psiproxy.config.settings import reset_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"

_CONFIG_ENV_VARS = (
    "PSI_API_KEY",
    "PSI_API_URL",
    "PSI_TIMEOUT",
    "PSI_PROXY_HOST",
    "PSI_PROXY_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True, scope="function")
def reset_singletons(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Reset the config singleton and isolate configuration env vars."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env file from leaking into tests
    monkeypatch.setattr("psiproxy.config.settings.load_dotenv", lambda: False)
    reset_config()

    yield

    reset_config()


@pytest.fixture
def psi_report() -> dict[str, Any]:
    """A trimmed real-world PSI v5 response."""
    with open(FIXTURES_DIR / "psi_report.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def lighthouse_result(psi_report: dict[str, Any]) -> dict[str, Any]:
    return psi_report["lighthouseResult"]
