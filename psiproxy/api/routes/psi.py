"""PSI summary endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from psiproxy.api.deps import get_report_fetcher, get_settings
from psiproxy.config.settings import Config
from psiproxy.core.psi import ReportFetcher
from psiproxy.core.report import flatten_report
from psiproxy.errors.exceptions import ReportError, UpstreamError, ValidationError
from psiproxy.schemas.common import DEFAULT_STRATEGY
from psiproxy.schemas.envelope import ResponseEnvelope

logger = logging.getLogger(__name__)

router = APIRouter()

EMPTY_URL_MESSAGE = "url不能为空"
INTERNAL_ERROR_MESSAGE = "Internal server error"
PSI_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _respond(envelope: ResponseEnvelope) -> JSONResponse:
    # Failures are reported in the body; the status is always 200.
    return JSONResponse(content=envelope.to_content(), status_code=200)


def _require_url(url: str | None) -> str:
    if not url:
        raise ValidationError(EMPTY_URL_MESSAGE)
    return url


@router.api_route("/psi", methods=PSI_METHODS)
async def psi_summary(
    url: str | None = Query(default=None, description="Page to audit"),
    strategy: str | None = Query(default=None, description="mobile or desktop"),
    key: str | None = Query(default=None, description="PageSpeed Insights API key"),
    full: str | None = Query(default=None, description="Return the raw report when set"),
    fetch_report: ReportFetcher = Depends(get_report_fetcher),  # noqa: B008
    config: Config = Depends(get_settings),  # noqa: B008
) -> JSONResponse:
    """
    Audit ``url`` with PageSpeed Insights and return a flattened summary.

    Any HTTP method is answered; only the query string is read. Every outcome
    is a ``{code, data, message}`` envelope; ``code`` is 1 on failure.
    """
    try:
        logger.info(f"PSI request: url={url!r} strategy={strategy!r} full={full!r}")

        try:
            url = _require_url(url)
        except ValidationError as e:
            return _respond(ResponseEnvelope.failure(str(e)))

        strategy = strategy or DEFAULT_STRATEGY

        try:
            report = await fetch_report(url, strategy=strategy, key=key or config.psi_api_key)
        except UpstreamError as e:
            return _respond(ResponseEnvelope.failure(str(e), e.detail))

        if full:
            return _respond(ResponseEnvelope.success(report))

        try:
            flattened = flatten_report(report, strategy)
        except ReportError as e:
            logger.warning(f"Could not flatten PSI report for {url}: {e}")
            return _respond(ResponseEnvelope.failure(str(e), e.detail))

        return _respond(ResponseEnvelope.success(flattened.model_dump()))

    except Exception as e:
        logger.exception(f"Unexpected error handling PSI request for {url!r}: {e}")
        return _respond(
            ResponseEnvelope.failure(INTERNAL_ERROR_MESSAGE, {"type": type(e).__name__})
        )
