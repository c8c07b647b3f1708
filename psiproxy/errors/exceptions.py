"""Custom exception classes for the PSI proxy."""

from typing import Any


class ProxyError(Exception):
    """Base exception for proxy failures."""

    pass


class ValidationError(ProxyError):
    """Exception for inbound parameter validation failures."""

    pass


class UpstreamError(ProxyError):
    """Exception for PageSpeed Insights transport or decoding failures."""

    def __init__(self, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


class ReportError(ProxyError):
    """Raised when a raw PSI report cannot be flattened."""

    def __init__(self, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.detail = detail
