"""
Shot list transport — URL-safe JSON for handing results between screens.
"""

from __future__ import annotations

import json
import logging
from typing import Sequence
from urllib.parse import quote, unquote

from hoopcoach.engine.normalizer import normalize_shots
from hoopcoach.models.shots import Shot

logger = logging.getLogger("hoopcoach.transport")


def encode_shots(shots: Sequence[Shot]) -> str:
    return quote(json.dumps([s.to_raw() for s in shots]), safe="")


def decode_shots(payload: str) -> list[Shot]:
    """
    Inverse of :func:`encode_shots`. Malformed payloads decode to ``[]`` so
    the caller can fall back to example data.
    """
    if not payload:
        return []
    try:
        data = json.loads(unquote(payload))
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("Discarding malformed shot payload: %s", e)
        return []
    if isinstance(data, dict):
        data = data.get("shots", [])
    if not isinstance(data, list):
        logger.warning("Shot payload is %s, expected a list", type(data).__name__)
        return []
    return normalize_shots([_with_exact_time(r) for r in data])


def _with_exact_time(record):
    # ``timestamp_of_outcome`` is rounded to 0.1s; the float field is not.
    if isinstance(record, dict):
        exact = record.get("timestamp_seconds")
        if isinstance(exact, (int, float)) and not isinstance(exact, bool):
            return {**record, "time": exact}
    return record
