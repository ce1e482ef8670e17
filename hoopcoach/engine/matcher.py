"""
Timeline Matcher — which shot, if any, belongs under the playhead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from hoopcoach.models.shots import Shot

DEFAULT_TOLERANCE_SECONDS = 2.0


def match_active(
    position_seconds: float,
    shots: Sequence[Shot],
    tolerance: float = DEFAULT_TOLERANCE_SECONDS,
) -> Optional[Shot]:
    """
    First shot in list order with ``|position - timestamp| < tolerance``.

    Ties between closely spaced shots go to the earlier list entry, not the
    closest one, so the overlay does not jump between neighbours.
    """
    for shot in shots:
        if abs(position_seconds - shot.timestamp_seconds) < tolerance:
            return shot
    return None


def shots_near(
    position_seconds: float,
    shots: Sequence[Shot],
    tolerance: float = DEFAULT_TOLERANCE_SECONDS,
) -> list[Shot]:
    """Every shot within tolerance, in list order."""
    return [s for s in shots if abs(position_seconds - s.timestamp_seconds) < tolerance]


def same_shot(a: Optional[Shot], b: Optional[Shot]) -> bool:
    if a is None or b is None:
        return a is b
    return a is b or a.timestamp_seconds == b.timestamp_seconds


@dataclass(frozen=True)
class MatchChange:
    shot: Optional[Shot]
    changed: bool


class TimelineMatcher:
    """
    Stateful wrapper around :func:`match_active` that reports only changes.

    Repeated samples that land on the same shot return ``changed=False`` so
    the caller does not restart the overlay dwell on every tick.
    """

    def __init__(self, shots: Sequence[Shot], tolerance: float = DEFAULT_TOLERANCE_SECONDS):
        self.shots = tuple(shots)
        self.tolerance = tolerance
        self._last: Optional[Shot] = None

    @property
    def last(self) -> Optional[Shot]:
        return self._last

    def update(self, position_seconds: float) -> MatchChange:
        shot = match_active(position_seconds, self.shots, self.tolerance)
        if same_shot(shot, self._last):
            return MatchChange(shot=self._last, changed=False)
        self._last = shot
        return MatchChange(shot=shot, changed=True)

    def prime(self, shot: Optional[Shot]) -> None:
        """Record a shot chosen by the user as the current match."""
        self._last = shot

    def reset(self) -> None:
        self._last = None
