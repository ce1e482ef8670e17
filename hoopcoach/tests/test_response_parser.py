"""Tests for parsing vision-model replies: JSON, fenced JSON, embedded JSON, prose."""

import json

from hoopcoach.ai.response_parser import (
    extract_shots_from_text,
    find_balanced_object,
    parse_ai_response,
    strip_code_fence,
)
from hoopcoach.engine.matcher import match_active
from hoopcoach.engine.normalizer import normalize_shots
from hoopcoach.models.shots import ShotResult


class TestStructuredReplies:

    def test_plain_json(self):
        parsed = parse_ai_response('{"shots": [{"time": "00:05", "outcome": "make"}]}')
        assert parsed.method == "json"
        assert parsed.shots == [{"time": "00:05", "outcome": "make"}]

    def test_fenced_json(self):
        text = '```json\n{"shots": [{"time": "00:05", "outcome": "miss"}]}\n```'
        parsed = parse_ai_response(text)
        assert parsed.method == "json"
        assert parsed.shots[0]["outcome"] == "miss"

    def test_fence_without_language(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_json_wrapped_in_prose(self):
        text = 'Here is the analysis: {"shots": [{"time": "0:09.0", "result": "made"}]} Keep shooting!'
        parsed = parse_ai_response(text)
        assert parsed.method == "embedded_json"
        assert parsed.shots[0]["result"] == "made"

    def test_bare_list(self):
        parsed = parse_ai_response('[{"time": "0:03"}, "junk", {"time": "0:08"}]')
        assert len(parsed.shots) == 2

    def test_single_shot_object(self):
        parsed = parse_ai_response('{"time": "0:03", "outcome": "make"}')
        assert len(parsed.shots) == 1

    def test_json_without_shots(self):
        parsed = parse_ai_response('{"summary": "nice session"}')
        assert parsed.method == "json"
        assert parsed.shots == []


class TestBalancedObject:

    def test_braces_inside_strings_ignored(self):
        text = 'prefix {"feedback": "keep {elbow} in", "n": {"x": 1}} suffix }'
        span = find_balanced_object(text)
        assert json.loads(span) == {"feedback": "keep {elbow} in", "n": {"x": 1}}

    def test_escaped_quote(self):
        span = find_balanced_object(r'x {"a": "say \"}\" now"} y')
        assert json.loads(span) == {"a": 'say "}" now'}

    def test_unbalanced(self):
        assert find_balanced_object("{ never closed") is None

    def test_no_object(self):
        assert find_balanced_object("no braces here") is None


class TestProseFallback:

    def test_missed_the_shot(self):
        parsed = parse_ai_response("The player missed the shot because the elbow flared out")
        assert parsed.method == "text_pattern"
        assert parsed.is_synthetic is True
        shots = normalize_shots(parsed.shots)
        assert len(shots) == 1
        assert shots[0].result == ShotResult.MISSED
        assert shots[0].timestamp_seconds == 30.0

    def test_headline_pattern(self):
        text = "MADE – Layup\nNice finish off the glass.\nMISSED - Three-pointer\nShort, use your legs."
        shots = extract_shots_from_text(text)
        assert [s["result"] for s in shots] == ["made", "missed"]
        assert [s["shot_type"] for s in shots] == ["Layup", "Three-pointer"]
        assert [s["time"] for s in shots] == ["0:30", "0:35"]
        assert "glass" in shots[0]["feedback"]

    def test_sentences_evenly_spaced(self):
        text = "First he made a layup. Then he missed a three pointer! Finally scored a jump shot."
        shots = extract_shots_from_text(text)
        assert [s["time"] for s in shots] == ["0:30", "0:35", "0:40"]
        assert [s["result"] for s in shots] == ["made", "missed", "made"]
        assert shots[1]["shot_type"] == "Three-pointer"

    def test_feedback_clipped(self):
        shots = extract_shots_from_text("He missed " + "x" * 500)
        assert len(shots[0]["feedback"]) == 200

    def test_malformed_json_falls_back_to_text(self):
        parsed = parse_ai_response('{"shots": [ {"outcome": "make"  oops. He made the shot.')
        assert parsed.method == "text_pattern"

    def test_nothing_recognisable(self):
        parsed = parse_ai_response("The video is too dark to see anything.")
        assert parsed.method == "none"
        assert parsed.shots == []

    def test_empty_and_none(self):
        assert parse_ai_response("").shots == []
        assert parse_ai_response(None).method == "none"

    def test_integer_beyond_conversion_limit(self):
        parsed = parse_ai_response('{"shots": [{"time": ' + "1" * 5000 + "}]}")
        assert parsed.method == "none"
        assert parsed.shots == []

    def test_oversized_integer_with_prose_uses_text(self):
        parsed = parse_ai_response("He made the shot. " + '{"time": ' + "1" * 5000 + "}")
        assert parsed.method == "text_pattern"
        assert len(parsed.shots) == 1

    def test_deeply_nested_reply(self):
        parsed = parse_ai_response("[" * 100000)
        assert parsed.method == "none"
        assert parsed.shots == []


class TestEndToEnd:

    def test_reply_to_active_shot(self):
        reply = '{"shots":[{"time":"00:05","outcome":"make","feedback":"Good form"}]}'
        shots = normalize_shots(parse_ai_response(reply).shots)
        assert len(shots) == 1
        shot = shots[0]
        assert shot.timestamp_seconds == 5.0
        assert shot.result == ShotResult.MADE
        assert (shot.made_count_at_this_point, shot.missed_count_at_this_point) == (1, 0)
        assert match_active(5.0, shots, 2.0) is shot
        assert match_active(10.0, shots, 2.0) is None
