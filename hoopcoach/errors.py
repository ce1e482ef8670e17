"""
Error taxonomy — parse failures are recovered locally, transport failures
are classified, and "no shots" is an outcome rather than an exception.
"""

from __future__ import annotations

from enum import Enum


class HoopCoachError(Exception):
    """Base class for all HoopCoach errors."""


class ParseError(HoopCoachError, ValueError):
    """Raised when text from the AI collaborator cannot be parsed."""


class TimestampParseError(ParseError):
    """Raised when a timestamp is not in ``m:ss``/``m:ss.S`` form."""

    def __init__(self, text: object):
        self.text = text
        super().__init__(f"Unrecognised timestamp: {text!r}")


class TransportErrorKind(str, Enum):
    QUOTA = "quota"
    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    UNAVAILABLE = "unavailable"

    @property
    def is_usage_limit(self) -> bool:
        return self in (TransportErrorKind.QUOTA, TransportErrorKind.RATE_LIMITED)


class TransportError(HoopCoachError):
    """The AI collaborator could not be reached or refused the request."""

    def __init__(self, kind: TransportErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}")


class AnalysisCancelled(HoopCoachError):
    """The owning view was torn down before the analysis finished."""
