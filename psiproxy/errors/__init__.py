"""Custom exceptions."""

from psiproxy.errors.exceptions import (
    ProxyError,
    ReportError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "ProxyError",
    "ReportError",
    "UpstreamError",
    "ValidationError",
]
