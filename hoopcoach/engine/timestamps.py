"""
Timestamp parsing for AI shot feedback.

The vision model reports shot times as ``m:ss.S`` (legacy prompt) or as
plain ``mm:ss``. Both are accepted without a format flag: the presence of a
decimal point after the seconds field is the only difference.
"""

from __future__ import annotations

import logging
import math
import re

from hoopcoach.errors import TimestampParseError

logger = logging.getLogger("hoopcoach.timestamps")

DEFAULT_TIMESTAMP = "0:00.0"

_MINUTES = re.compile(r"\d+")
_SECONDS = re.compile(r"\d+(?:\.\d+)?")


def parse_timestamp(text: str) -> float:
    """
    Convert ``"m:ss.S"`` or ``"mm:ss"`` into seconds.

    Splits on the first colon; the left side is whole minutes and the right
    side is seconds with an optional fractional part.

    Raises:
        TimestampParseError: text is not a colon-separated minute:second pair.
    """
    if not isinstance(text, str):
        raise TimestampParseError(text)

    minutes, sep, seconds = text.strip().partition(":")
    if not sep or not _MINUTES.fullmatch(minutes) or not _SECONDS.fullmatch(seconds):
        raise TimestampParseError(text)

    try:
        total = int(minutes) * 60 + float(seconds)
    except (OverflowError, ValueError):
        raise TimestampParseError(text) from None
    if not math.isfinite(total):
        raise TimestampParseError(text)
    return total


def parse_timestamp_or_default(text: object, default: str = DEFAULT_TIMESTAMP) -> float:
    """Like :func:`parse_timestamp` but falls back to ``default`` instead of raising."""
    try:
        return parse_timestamp(text)  # type: ignore[arg-type]
    except TimestampParseError:
        logger.warning("Bad timestamp %r, using %s", text, default)
        return parse_timestamp(default)


def format_timestamp(seconds: float) -> str:
    """Render seconds as the ``m:ss`` label shown on the timeline."""
    seconds = max(0.0, seconds)
    mins = int(seconds // 60)
    secs = int(math.floor(seconds % 60))
    return f"{mins}:{secs:02d}"
