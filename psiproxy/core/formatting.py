"""Human-readable formatting for durations and audited URLs."""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from urllib.parse import urlsplit, urlunsplit

DurationFormatter = Callable[[float], str]

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR
_DAYS_PER_YEAR = 365

# Guards against 1.3 * 10 landing on 12.999999...
_SECOND_ROUNDING_EPSILON = 0.0000001

_SCHEME_RE = re.compile(r"^(?:https?:)?//", re.IGNORECASE)
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _floor_tenths(seconds: float) -> str:
    floored = math.floor(seconds * 10 + _SECOND_ROUNDING_EPSILON) / 10
    text = f"{floored:.1f}"
    return text[:-2] if text.endswith(".0") else text


def pretty_ms(milliseconds: float) -> str:
    """
    Format a millisecond count as a compact duration string.

    Sub-second values are shown in whole milliseconds ("350ms"); longer
    values are broken into y/d/h/m units plus seconds with one decimal
    ("1.3s", "1m 5.5s").
    """
    if not math.isfinite(milliseconds) or milliseconds < 0:
        raise ValueError(f"Expected a non-negative finite number, got {milliseconds!r}")

    if milliseconds < _MS_PER_SECOND:
        if milliseconds == 0:
            return "0ms"
        rounded = _round_half_up(milliseconds) if milliseconds >= 1 else math.ceil(milliseconds)
        return f"{rounded}ms"

    total_days = int(milliseconds // _MS_PER_DAY)
    units = [
        (total_days // _DAYS_PER_YEAR, "y"),
        (total_days % _DAYS_PER_YEAR, "d"),
        (int(milliseconds // _MS_PER_HOUR) % 24, "h"),
        (int(milliseconds // _MS_PER_MINUTE) % 60, "m"),
    ]
    parts = [f"{value}{suffix}" for value, suffix in units if value]

    seconds = _floor_tenths((milliseconds / _MS_PER_SECOND) % 60)
    if seconds != "0":
        parts.append(f"{seconds}s")

    return " ".join(parts)


def humanize_url(url: str) -> str:
    """Render a URL for display: no scheme, credentials, default port or trailing slash."""
    url = url.strip()
    parsed = urlsplit(url if "://" in url or url.startswith("//") else f"//{url}")

    netloc = (parsed.hostname or "").lower()
    if ":" in netloc:
        netloc = f"[{netloc}]"
    if parsed.port is not None and parsed.port != _DEFAULT_PORTS.get(parsed.scheme.lower()):
        netloc = f"{netloc}:{parsed.port}"

    # Credentials are never rebuilt into the display form.
    rebuilt = urlunsplit(
        (parsed.scheme, netloc, parsed.path.rstrip("/"), parsed.query, parsed.fragment)
    )
    return _SCHEME_RE.sub("", rebuilt)
