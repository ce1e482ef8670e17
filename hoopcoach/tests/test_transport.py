"""Tests for shot list transport encoding."""

import json
from urllib.parse import quote, unquote

from hoopcoach.engine.examples import example_shots
from hoopcoach.engine.normalizer import normalize_shots
from hoopcoach.engine.transport import decode_shots, encode_shots
from hoopcoach.models.shots import ShotResult


class TestEncodeShots:

    def test_payload_is_url_safe(self, game_shots):
        payload = encode_shots(game_shots)
        for ch in "{}[]\": /?&=":
            assert ch not in payload

    def test_uses_legacy_field_names(self, game_shots):
        data = json.loads(unquote(encode_shots(game_shots)))
        assert data[0]["timestamp_of_outcome"] == "0:07.5"
        assert data[1]["total_shots_made_so_far"] == 1
        assert data[2]["total_layups_made_so_far"] == 1

    def test_empty_list(self):
        assert decode_shots(encode_shots([])) == []


class TestDecodeShots:

    def test_restores_shots(self, game_shots):
        shots = decode_shots(encode_shots(game_shots))
        assert [s.timestamp_seconds for s in shots] == [7.5, 13.0, 21.5]
        assert [s.result for s in shots] == [ShotResult.MISSED, ShotResult.MADE, ShotResult.MADE]
        assert shots[2].layups_made_at_this_point == 1

    def test_sub_tenth_times_survive(self):
        shots = normalize_shots([{"time": 12.25, "outcome": "make"}, {"time": 61.04, "outcome": "miss"}])
        restored = decode_shots(encode_shots(shots))
        assert [s.timestamp_seconds for s in restored] == [12.25, 61.04]

    def test_legacy_payload_without_exact_time(self):
        raw = [{"timestamp_of_outcome": "0:12.2", "result": "made"}]
        shots = decode_shots(quote(json.dumps(raw), safe=""))
        assert shots[0].timestamp_seconds == 12.2

    def test_bad_exact_time_falls_back_to_text(self):
        raw = [{"timestamp_seconds": -1, "timestamp_of_outcome": "0:05.0"}]
        shots = decode_shots(quote(json.dumps(raw), safe=""))
        assert shots[0].timestamp_seconds == 5.0

    def test_feedback_with_special_characters(self):
        raw = [{"time": "0:04", "result": "made", "feedback": "Great arc & follow-through: 100% \"money\" 🏀"}]
        shots = decode_shots(quote(json.dumps(raw), safe=""))
        assert shots[0].feedback == raw[0]["feedback"]

    def test_wrapped_in_shots_key(self):
        payload = quote(json.dumps({"shots": [{"time": "0:09", "outcome": "make"}]}), safe="")
        shots = decode_shots(payload)
        assert len(shots) == 1
        assert shots[0].timestamp_seconds == 9.0

    def test_malformed_payload_is_empty(self):
        assert decode_shots("%7B%22shots%22%3A") == []
        assert decode_shots("not json") == []
        assert decode_shots("") == []

    def test_hostile_payload_is_empty(self):
        assert decode_shots(quote("[" * 100000, safe="")) == []
        assert decode_shots(quote("[" + "1" * 5000 + "]", safe="")) == []

    def test_non_list_payload_is_empty(self):
        assert decode_shots(quote(json.dumps("hello"), safe="")) == []
        assert decode_shots(quote(json.dumps(42), safe="")) == []

    def test_examples_survive_transport(self):
        shots = example_shots()
        assert decode_shots(encode_shots(shots)) == shots
