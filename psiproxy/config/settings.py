"""Centralized configuration loading."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

PSI_API_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    # Upstream
    psi_api_key: str
    psi_api_url: str
    request_timeout: float | None

    # Server
    host: str
    port: int
    log_level: str


def _get_optional_env(key: str, default: str) -> str:
    """Get optional environment variable with default."""
    value = os.getenv(key)
    return value.strip() if value else default


def _parse_timeout(raw: str) -> float | None:
    """Empty means no timeout at all."""
    if not raw:
        return None
    timeout = float(raw)
    if timeout <= 0:
        raise ValueError(f"PSI_TIMEOUT must be positive, got {raw}")
    return timeout


def _parse_port(raw: str) -> int:
    port = int(raw)
    if not (1 <= port <= 65535):
        raise ValueError(f"Port {port} is out of valid range (1-65535)")
    return port


def _parse_log_level(raw: str) -> str:
    level = raw.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw}")
    return level


def load_config() -> Config:
    """Load and validate configuration from environment."""
    load_dotenv()

    return Config(
        psi_api_key=_get_optional_env("PSI_API_KEY", ""),
        psi_api_url=_get_optional_env("PSI_API_URL", PSI_API_URL),
        request_timeout=_parse_timeout(_get_optional_env("PSI_TIMEOUT", "")),
        host=_get_optional_env("PSI_PROXY_HOST", "127.0.0.1"),
        port=_parse_port(_get_optional_env("PSI_PROXY_PORT", "8888")),
        log_level=_parse_log_level(_get_optional_env("LOG_LEVEL", "INFO")),
    )


# Singleton config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the configuration singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset config singleton (useful for testing)."""
    global _config
    _config = None
