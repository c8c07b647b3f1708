"""Tests for the PSI upstream client."""

from typing import Any

import httpx
import pytest

from psiproxy.config.settings import PSI_API_URL
from psiproxy.core.psi import build_params, fetch_audit_report
from psiproxy.errors.exceptions import UpstreamError


def _client(handler: Any) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestBuildParams:
    """Test upstream query construction."""

    def test_defaults_to_mobile_without_key(self):
        assert build_params("https://example.com") == {
            "url": "https://example.com",
            "strategy": "mobile",
            "nokey": "true",
        }

    def test_empty_strategy_defaults_to_mobile(self):
        assert build_params("https://example.com", strategy="")["strategy"] == "mobile"

    def test_with_key(self):
        params = build_params("https://example.com", strategy="desktop", key="abc123")
        assert params["key"] == "abc123"
        assert params["strategy"] == "desktop"
        assert "nokey" not in params


class TestFetchAuditReport:
    """Test the single outbound request."""

    @pytest.mark.asyncio
    async def test_returns_parsed_json(self, psi_report: dict[str, Any]):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=psi_report)

        async with _client(handler) as client:
            result = await fetch_audit_report("https://www.example.com/", client=client)

        assert result == psi_report
        assert len(seen) == 1
        assert str(seen[0].url).startswith(PSI_API_URL)
        assert seen[0].url.params["url"] == "https://www.example.com/"
        assert seen[0].url.params["strategy"] == "mobile"
        assert seen[0].url.params["nokey"] == "true"

    @pytest.mark.asyncio
    async def test_upstream_error_document_is_returned(self):
        error_body = {"error": {"code": 429, "message": "Quota exceeded"}}

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json=error_body)

        async with _client(handler) as client:
            result = await fetch_audit_report("https://example.com", key="k", client=client)

        assert result == error_body

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        async with _client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await fetch_audit_report("https://example.com", client=client)

        assert "invalid JSON" in str(exc_info.value)
        assert exc_info.value.detail["type"] == "JSONDecodeError"

    @pytest.mark.asyncio
    async def test_connection_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        async with _client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await fetch_audit_report("https://example.com", client=client)

        assert "Failed to connect to PSI API" in str(exc_info.value)
        assert exc_info.value.detail == {
            "type": "ConnectError",
            "reason": "Name or service not known",
        }

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as client:
            with pytest.raises(UpstreamError, match="timed out"):
                await fetch_audit_report("https://example.com", client=client)

    @pytest.mark.asyncio
    async def test_custom_endpoint(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with _client(handler) as client:
            await fetch_audit_report(
                "https://example.com", api_url="http://psi.test/run", client=client
            )

        assert seen[0].url.host == "psi.test"
        assert seen[0].url.path == "/run"
