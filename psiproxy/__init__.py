"""PSI Proxy - flattens PageSpeed Insights reports behind a single endpoint."""

from psiproxy.core.formatting import humanize_url, pretty_ms
from psiproxy.core.psi import fetch_audit_report
from psiproxy.core.report import flatten_report
from psiproxy.schemas.report import FlattenedReport, LabelValueEntry

__all__ = [
    "fetch_audit_report",
    "flatten_report",
    "humanize_url",
    "pretty_ms",
    "FlattenedReport",
    "LabelValueEntry",
]
