"""PSI fetcher - requests a raw report from the PageSpeed Insights API."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from psiproxy.config.settings import PSI_API_URL
from psiproxy.errors.exceptions import UpstreamError
from psiproxy.schemas.common import DEFAULT_STRATEGY

logger = logging.getLogger(__name__)


class ReportFetcher(Protocol):
    """Callable that resolves a URL into a raw PSI report."""

    async def __call__(
        self, url: str, strategy: str | None = None, key: str | None = None
    ) -> Any: ...


def build_params(url: str, strategy: str | None = None, key: str | None = None) -> dict[str, str]:
    """Query parameters for a runPagespeed call; without a key the API wants ``nokey``."""
    params: dict[str, str] = {
        "url": url,
        "strategy": strategy or DEFAULT_STRATEGY,
    }
    if key:
        params["key"] = key
    else:
        params["nokey"] = "true"
    return params


def _failure_detail(error: Exception) -> dict[str, Any]:
    return {"type": type(error).__name__, "reason": str(error)}


async def fetch_audit_report(
    url: str,
    strategy: str | None = None,
    key: str | None = None,
    *,
    api_url: str = PSI_API_URL,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """
    Fetch a raw PSI report for ``url``.

    Makes exactly one request. Whatever JSON the API answers with is
    returned, including its own error documents; only transport failures
    and undecodable bodies raise.

    Raises:
        UpstreamError: On connection failure, timeout or a non-JSON body.
    """
    params = build_params(url, strategy, key)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned_client:
                response = await owned_client.get(api_url, params=params)
        else:
            response = await client.get(api_url, params=params)
    except httpx.TimeoutException as e:
        logger.warning(f"PSI API request timed out for {url}: {e}")
        raise UpstreamError(f"PSI API request timed out: {e}", _failure_detail(e)) from e
    except httpx.RequestError as e:
        logger.warning(f"Failed to connect to PSI API for {url}: {e}")
        raise UpstreamError(f"Failed to connect to PSI API: {e}", _failure_detail(e)) from e

    try:
        return response.json()
    except ValueError as e:
        logger.warning(f"PSI API returned a non-JSON body (status {response.status_code})")
        raise UpstreamError(f"PSI API returned invalid JSON: {e}", _failure_detail(e)) from e
