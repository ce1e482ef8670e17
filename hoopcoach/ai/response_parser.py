"""
Parse whatever the vision model sent back into raw shot records.

The response is not schema-guaranteed. In order of preference it is read as
plain JSON, JSON inside a fenced code block, the first balanced ``{...}``
span in surrounding prose, and finally as prose from which shots are
guessed by "made"/"missed" wording. The last path gives evenly spaced
placeholder times and is logged as a degradation.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from hoopcoach.engine.timestamps import format_timestamp
from hoopcoach.models.shots import DEFAULT_SHOT_TYPE

logger = logging.getLogger("hoopcoach.response_parser")

FEEDBACK_LIMIT = 200
SYNTHETIC_START_SECONDS = 30
SYNTHETIC_SPACING_SECONDS = 5

_FENCE = re.compile(r"^```[\w-]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)
_HEADLINE = re.compile(r"\b(MADE|MISSED)\s*[-–—:]\s*([^\"\n]+)", re.IGNORECASE)
_OUTCOME_WORD = re.compile(
    r"\b(made|makes|make|scored|scores|score|missed|misses|miss)\b", re.IGNORECASE
)
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+|\n+")
_SHOT_TYPES = (
    ("three-pointer", "Three-pointer"),
    ("three pointer", "Three-pointer"),
    ("3-pointer", "Three-pointer"),
    ("free throw", "Free throw"),
    ("free-throw", "Free throw"),
    ("layup", "Layup"),
    ("lay-up", "Layup"),
    ("dunk", "Dunk"),
    ("floater", "Floater"),
    ("hook shot", "Hook shot"),
    ("jump shot", "Jump shot"),
)


@dataclass
class ParsedResponse:
    """Raw shot records plus how they were recovered."""
    shots: list[dict] = field(default_factory=list)
    method: str = "none"  # json | embedded_json | text_pattern | none

    @property
    def is_synthetic(self) -> bool:
        return self.method == "text_pattern"


def strip_code_fence(text: str) -> str:
    text = text.strip()
    match = _FENCE.match(text)
    return match.group(1).strip() if match else text


def find_balanced_object(text: str) -> Optional[str]:
    """Return the first ``{...}`` span whose braces balance, honouring JSON strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        start = text.find("{", start + 1)
    return None


def _shots_from_json(data: Any) -> list[dict]:
    if isinstance(data, list):
        return [s for s in data if isinstance(s, dict)]
    if isinstance(data, dict):
        shots = data.get("shots")
        if isinstance(shots, list):
            return [s for s in shots if isinstance(s, dict)]
        if any(k in data for k in ("outcome", "result", "time", "timestamp_of_outcome")):
            return [data]
    return []


def _synthetic_time(index: int) -> str:
    return format_timestamp(SYNTHETIC_START_SECONDS + index * SYNTHETIC_SPACING_SECONDS)


def _guess_shot_type(text: str) -> str:
    lowered = text.lower()
    for needle, label in _SHOT_TYPES:
        if needle in lowered:
            return label
    return DEFAULT_SHOT_TYPE


def _outcome_from_word(word: str) -> str:
    return "missed" if word.lower().startswith("miss") else "made"


def extract_shots_from_text(text: str) -> list[dict]:
    """
    Heuristic extraction from prose.

    ``MADE – Jump shot`` style headlines are used when present, with the text
    up to the next headline as feedback. Otherwise each sentence that says a
    shot was made or missed becomes one shot.
    """
    headlines = list(_HEADLINE.finditer(text))
    shots: list[dict] = []
    if headlines:
        for i, match in enumerate(headlines):
            end = headlines[i + 1].start() if i + 1 < len(headlines) else len(text)
            shots.append({
                "time": _synthetic_time(i),
                "result": _outcome_from_word(match.group(1)),
                "shot_type": match.group(2).strip() or DEFAULT_SHOT_TYPE,
                "feedback": text[match.end():end].strip()[:FEEDBACK_LIMIT],
            })
        return shots

    for sentence in _SENTENCE_SPLIT.split(text):
        sentence = sentence.strip()
        word = _OUTCOME_WORD.search(sentence)
        if not word:
            continue
        shots.append({
            "time": _synthetic_time(len(shots)),
            "result": _outcome_from_word(word.group(1)),
            "shot_type": _guess_shot_type(sentence),
            "feedback": sentence[:FEEDBACK_LIMIT],
        })
    return shots


def parse_ai_response(text: Optional[str]) -> ParsedResponse:
    """Recover raw shot records from a model response. Never raises."""
    if not text or not isinstance(text, str):
        return ParsedResponse()

    body = strip_code_fence(text)
    try:
        return ParsedResponse(shots=_shots_from_json(json.loads(body)), method="json")
    except (ValueError, RecursionError):
        pass

    span = find_balanced_object(body)
    if span is not None:
        try:
            data = json.loads(span)
        except (ValueError, RecursionError):
            logger.warning("Embedded JSON span did not parse, trying text patterns")
        else:
            return ParsedResponse(shots=_shots_from_json(data), method="embedded_json")

    shots = extract_shots_from_text(body)
    if shots:
        logger.warning("No JSON in model response; extracted %d shot(s) from text", len(shots))
        return ParsedResponse(shots=shots, method="text_pattern")

    logger.info("No shots found in model response (%d chars)", len(text))
    return ParsedResponse()
