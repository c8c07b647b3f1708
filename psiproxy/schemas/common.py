"""Common schemas and enums shared across the application."""

from enum import Enum, IntEnum


class ResponseCode(IntEnum):
    """Envelope result code."""

    SUCCESS = 0
    FAILURE = 1


class Strategy(str, Enum):
    """Device profile used by PageSpeed Insights."""

    MOBILE = "mobile"
    DESKTOP = "desktop"


DEFAULT_STRATEGY = Strategy.MOBILE.value
