"""
Example shot feedback shown when the vision service cannot be used.
"""

from __future__ import annotations

from hoopcoach.engine.normalizer import normalize_shots
from hoopcoach.models.shots import Shot

EXAMPLE_RAW_SHOTS: list[dict] = [
    {
        "timestamp_of_outcome": "0:07.5",
        "result": "missed",
        "shot_type": "Jump shot (around free-throw line)",
        "feedback": "You're pushing that ball, not shooting it; get your elbow under, extend fully, and follow through.",
    },
    {
        "timestamp_of_outcome": "0:13.0",
        "result": "made",
        "shot_type": "Three-pointer",
        "feedback": "It went in, but watch that slight fade. Keep your shoulders square to the hoop through the whole motion.",
    },
    {
        "timestamp_of_outcome": "0:21.5",
        "result": "made",
        "shot_type": "Layup",
        "feedback": "Drive that knee on the layup, protect the ball higher with your off-hand, and finish decisively.",
    },
]


def example_shots() -> list[Shot]:
    return normalize_shots(EXAMPLE_RAW_SHOTS)
