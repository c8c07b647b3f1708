"""API dependencies for dependency injection."""

from functools import partial

from fastapi import Depends

from psiproxy.config.settings import Config, get_config
from psiproxy.core.psi import ReportFetcher, fetch_audit_report


def get_settings() -> Config:
    """Get application settings dependency."""
    return get_config()


def get_report_fetcher(config: Config = Depends(get_settings)) -> ReportFetcher:  # noqa: B008
    """Get the upstream report fetcher, bound to the configured endpoint."""
    return partial(
        fetch_audit_report,
        api_url=config.psi_api_url,
        timeout=config.request_timeout,
    )
