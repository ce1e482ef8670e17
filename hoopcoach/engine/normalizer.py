"""
Shot Normalizer — maps whatever the vision model returned onto ``Shot``.

The collaborator's response shape drifts between prompts and model versions:
the outcome may arrive as ``outcome`` (make/miss), ``result`` (made/missed)
or buried in free text, and the time as ``time`` or ``timestamp_of_outcome``.
A record that cannot be read cleanly is still emitted with defaults, so one
bad entry never costs the user the rest of their feedback.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from hoopcoach.engine.timestamps import DEFAULT_TIMESTAMP, parse_timestamp
from hoopcoach.errors import TimestampParseError
from hoopcoach.models.shots import DEFAULT_SHOT_TYPE, Shot, ShotResult

logger = logging.getLogger("hoopcoach.normalizer")

OUTCOME_MAP = {"make": ShotResult.MADE, "miss": ShotResult.MISSED}
RESULT_MAP = {"made": ShotResult.MADE, "missed": ShotResult.MISSED}
SUCCESS_TOKENS = ("made", "make", "score")
TIME_FIELDS = ("time", "timestamp_of_outcome")


def resolve_result(record: Mapping[str, Any]) -> ShotResult:
    """Pick the shot outcome: ``outcome`` enum, then ``result`` enum, then a text search."""
    outcome = record.get("outcome")
    if isinstance(outcome, str) and outcome in OUTCOME_MAP:
        return OUTCOME_MAP[outcome]

    result = record.get("result")
    if isinstance(result, str) and result in RESULT_MAP:
        return RESULT_MAP[result]

    text = " ".join(str(v) for v in (outcome, result) if v is not None).lower()
    if any(token in text for token in SUCCESS_TOKENS):
        return ShotResult.MADE
    return ShotResult.MISSED


def resolve_timestamp(record: Mapping[str, Any]) -> float:
    """Seconds from ``time``, else ``timestamp_of_outcome``, else 0:00.0."""
    for name in TIME_FIELDS:
        value = record.get(name)
        if value is None or value == "":
            continue
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                seconds = float(value)
            except OverflowError:
                logger.warning("Out-of-range %s on shot record", name)
                continue
            if math.isfinite(seconds) and seconds >= 0:
                return seconds
            logger.warning("Unusable %s=%r on shot record", name, value)
            continue
        try:
            return parse_timestamp(value)
        except TimestampParseError:
            logger.warning("Unparseable %s=%r on shot record", name, value)
    return parse_timestamp(DEFAULT_TIMESTAMP)


def _text(record: Mapping[str, Any], key: str, default: str) -> str:
    value = record.get(key)
    if value is None:
        return default
    value = str(value).strip()
    return value or default


class ShotNormalizer:
    """
    Turns heterogeneous raw shot records into an ordered list of ``Shot``.

    Running counters are always recomputed from the output order; counters
    supplied by the model are ignored because they are not reliably
    monotonic.

    Args:
        sort_chronologically: stable-sort records by parsed timestamp before
            tallying. Off by default so list order is preserved.
    """

    def __init__(self, sort_chronologically: bool = False):
        self.sort_chronologically = sort_chronologically

    def normalize(self, raw_shots: Optional[Iterable[Any]]) -> list[Shot]:
        if isinstance(raw_shots, Mapping):
            raw_shots = [raw_shots]
        elif raw_shots is None or isinstance(raw_shots, (str, bytes)) or not isinstance(raw_shots, Iterable):
            return []

        staged = []
        for raw in raw_shots:
            record = raw if isinstance(raw, Mapping) else {}
            staged.append((
                resolve_timestamp(record),
                resolve_result(record),
                _text(record, "shot_type", DEFAULT_SHOT_TYPE),
                _text(record, "feedback", ""),
            ))

        if self.sort_chronologically:
            staged.sort(key=lambda item: item[0])

        shots: list[Shot] = []
        made = missed = layups = 0
        for seconds, result, shot_type, feedback in staged:
            if result == ShotResult.MADE:
                made += 1
                if "layup" in shot_type.lower():
                    layups += 1
            else:
                missed += 1
            shots.append(Shot(
                timestamp_seconds=seconds,
                result=result,
                shot_type=shot_type,
                feedback=feedback,
                made_count_at_this_point=made,
                missed_count_at_this_point=missed,
                layups_made_at_this_point=layups,
            ))

        logger.debug("Normalised %d shot records (%d made, %d missed)", len(shots), made, missed)
        return shots


def normalize_shots(raw_shots: Optional[Iterable[Any]], sort_chronologically: bool = False) -> list[Shot]:
    """Module-level shortcut for :meth:`ShotNormalizer.normalize`."""
    return ShotNormalizer(sort_chronologically=sort_chronologically).normalize(raw_shots)
