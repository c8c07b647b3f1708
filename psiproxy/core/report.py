"""Report flattening - reshapes a raw PSI report into label/value sections."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from typing import Any, cast

from psiproxy.core.formatting import DurationFormatter, humanize_url, pretty_ms
from psiproxy.errors.exceptions import ReportError
from psiproxy.schemas.report import FlattenedReport, LabelValueEntry

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics"
OPPORTUNITIES_GROUP = "load-opportunities"

_WHITESPACE_RE = re.compile(r"\s")


# === Helpers ===


def _by_label(entries: list[LabelValueEntry]) -> list[LabelValueEntry]:
    return sorted(entries, key=lambda entry: entry.label)


def _get_rules(lighthouse_result: dict[str, Any], group: str) -> list[dict[str, Any]]:
    """Audit references of the performance category tagged with ``group``."""
    performance = lighthouse_result.get("categories", {}).get("performance", {})
    audit_refs = cast(list[dict[str, Any]], performance.get("auditRefs") or [])
    return [ref for ref in audit_refs if ref.get("group") == group]


def _get_audits(lighthouse_result: dict[str, Any]) -> dict[str, Any]:
    return cast(dict[str, Any], lighthouse_result.get("audits") or {})


def _to_percentum(score: Any) -> int:
    """Scale a 0-1 score to 0-100, rounding half up."""
    if not isinstance(score, (int, float)):
        return 0
    return math.floor(score * 100 + 0.5)


# === Extractors ===


def overview(url: str, strategy: str, lighthouse_result: dict[str, Any]) -> list[LabelValueEntry]:
    """URL, Strategy and Performance rows, in that fixed order."""
    score = lighthouse_result.get("categories", {}).get("performance", {}).get("score")
    return [
        LabelValueEntry(label="URL", value=url),
        LabelValueEntry(label="Strategy", value=strategy),
        LabelValueEntry(label="Performance", value=_to_percentum(score)),
    ]


def field_data(
    metrics: dict[str, Any],
    format_duration: DurationFormatter = pretty_ms,
) -> list[LabelValueEntry]:
    """One row per field metric, valued by its formatted percentile."""
    entries = [
        LabelValueEntry(label=name, value=format_duration(metric["percentile"]))
        for name, metric in metrics.items()
    ]
    return _by_label(entries)


def lab_data(lighthouse_result: dict[str, Any]) -> list[LabelValueEntry]:
    """Lab metric audits with their display values, whitespace removed."""
    audits = _get_audits(lighthouse_result)
    entries: list[LabelValueEntry] = []

    for rule in _get_rules(lighthouse_result, METRICS_GROUP):
        audit = audits.get(rule.get("id", ""))
        if audit is None:
            continue
        display_value = str(audit.get("displayValue") or "")
        entries.append(
            LabelValueEntry(
                label=str(audit.get("title", "")),
                value=_WHITESPACE_RE.sub("", display_value),
            )
        )

    return _by_label(entries)


def opportunities(
    lighthouse_result: dict[str, Any],
    format_duration: DurationFormatter = pretty_ms,
) -> list[LabelValueEntry]:
    """Load opportunities that promise a positive time saving."""
    audits = _get_audits(lighthouse_result)
    entries: list[LabelValueEntry] = []

    for rule in _get_rules(lighthouse_result, OPPORTUNITIES_GROUP):
        audit = audits.get(rule.get("id", ""))
        if audit is None:
            continue
        details = audit.get("details")
        if not details or details.get("type") != "opportunity":
            continue
        savings = details.get("overallSavingsMs")
        if not isinstance(savings, (int, float)) or savings <= 0:
            continue
        entries.append(
            LabelValueEntry(label=str(audit.get("title", "")), value=format_duration(savings))
        )

    return _by_label(entries)


# === Assembly ===


def zip_entries(entries: Iterable[LabelValueEntry]) -> dict[str, str | int]:
    """Fold entries into a label -> value mapping; later labels overwrite earlier ones."""
    zipped: dict[str, str | int] = {}
    for entry in entries:
        if entry.label in zipped:
            logger.warning(f"Duplicate label {entry.label!r}, keeping the last value")
        zipped[entry.label] = entry.value
    return zipped


def _get_field_metrics(report: dict[str, Any]) -> dict[str, Any]:
    """
    Field metrics for the URL, falling back to origin-level data.

    Returns an empty mapping when the page has no field data at all.
    """
    for key in ("loadingExperience", "originLoadingExperience"):
        experience = report.get(key)
        if isinstance(experience, dict):
            metrics = cast(dict[str, Any], experience).get("metrics")
            if metrics:
                return cast(dict[str, Any], metrics)
    return {}


def flatten_report(
    report: dict[str, Any],
    strategy: str,
    format_duration: DurationFormatter = pretty_ms,
) -> FlattenedReport:
    """
    Reshape a raw PSI report into overview, statistics, rule results and opportunities.

    Raises:
        ReportError: If the report is an upstream error document or has no Lighthouse result.
    """
    upstream_error = report.get("error")
    if upstream_error is not None:
        if isinstance(upstream_error, dict):
            message = str(upstream_error.get("message") or "PSI API returned an error")
            raise ReportError(message, cast(dict[str, Any], upstream_error))
        raise ReportError(str(upstream_error))

    lighthouse_result = report.get("lighthouseResult")
    if not isinstance(lighthouse_result, dict):
        raise ReportError("PSI report has no lighthouseResult")
    lighthouse_result = cast(dict[str, Any], lighthouse_result)

    return FlattenedReport(
        overview=zip_entries(
            overview(humanize_url(str(report.get("id", ""))), strategy, lighthouse_result)
        ),
        statistics=zip_entries(field_data(_get_field_metrics(report), format_duration)),
        ruleResults=zip_entries(lab_data(lighthouse_result)),
        opportunities=zip_entries(opportunities(lighthouse_result, format_duration)),
    )
