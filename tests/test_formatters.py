"""Tests for output formatters."""

import json

from dictation_coach.config import PracticeConfig
from dictation_coach.formatters import (
    feedback_label,
    format_score_json,
    format_score_txt,
    format_segments_json,
    format_segments_txt,
    format_time,
    score_style,
    segment_badge_style,
)
from dictation_coach.segments import partition
from dictation_coach.types import DictationAttempt, Mistake, ScoreResult


class TestFormatTime:
    """Tests for format_time function."""

    def test_zero(self):
        assert format_time(0) == "0:00"

    def test_seconds_are_padded(self):
        assert format_time(5) == "0:05"

    def test_minutes(self):
        assert format_time(75.9) == "1:15"

    def test_long_media_keeps_counting_minutes(self):
        assert format_time(3725) == "62:05"


class TestFeedback:
    """Tests for score verdicts and styles."""

    def test_labels(self):
        assert feedback_label(95) == "Excellent!"
        assert feedback_label(90) == "Excellent!"
        assert feedback_label(70) == "Good!"
        assert feedback_label(69) == "Needs improvement"

    def test_score_styles(self):
        assert score_style(100) == "green"
        assert score_style(75) == "yellow"
        assert score_style(10) == "red"

    def test_segment_badge_styles(self):
        assert segment_badge_style(80) == "green"
        assert segment_badge_style(60) == "yellow"
        assert segment_badge_style(59) == "red"

    def test_custom_thresholds(self):
        config = PracticeConfig(excellent_threshold=99, good_threshold=50)
        assert feedback_label(95, config) == "Good!"


class TestFormatSegments:
    """Tests for segment list formatters."""

    def test_txt_lines(self):
        segments = partition(40, 15)
        segments[1].score = 67
        txt = format_segments_txt(segments)
        assert txt.splitlines() == [
            "Segment 1: 0:00 - 0:15",
            "Segment 2: 0:15 - 0:30 [67/100]",
            "Segment 3: 0:30 - 0:40",
        ]

    def test_txt_with_texts(self):
        segments = partition(20, 10)
        txt = format_segments_txt(segments, {0: "hello there", 1: ""})
        lines = txt.splitlines()
        assert lines[1] == "    hello there"
        assert lines[3] == "    (no reference text)"

    def test_json(self):
        data = json.loads(format_segments_json(partition(40, 15), duration=40.0))
        assert data["duration_seconds"] == 40.0
        assert [s["end"] for s in data["segments"]] == [15.0, 30.0, 40.0]
        assert data["segments"][2]["duration"] == 10.0
        assert "text" not in data["segments"][0]

    def test_json_with_texts(self):
        data = json.loads(format_segments_json(partition(20, 10), {0: "a b", 1: "c"}))
        assert [s["text"] for s in data["segments"]] == ["a b", "c"]


class TestFormatScore:
    """Tests for score result formatters."""

    def make_result(self, count: int) -> ScoreResult:
        mistakes = tuple(Mistake(word=f"w{i}", suggestion=f"s{i}") for i in range(count))
        return ScoreResult(score=40, mistakes=mistakes)

    def test_txt_header(self):
        txt = format_score_txt(ScoreResult(score=100))
        assert txt == "Score: 100/100 (Excellent!)"

    def test_txt_limits_mistakes(self):
        txt = format_score_txt(self.make_result(8))
        assert '"w4" -> "s4"' in txt
        assert '"w5"' not in txt
        assert "... and 3 more" in txt

    def test_txt_all_mistakes(self):
        txt = format_score_txt(self.make_result(8), show_all_mistakes=True)
        assert '"w7" -> "s7"' in txt
        assert "more" not in txt

    def test_json_lists_every_mistake(self):
        data = json.loads(format_score_json(self.make_result(8)))
        assert data["score"] == 40
        assert len(data["mistakes"]) == 8
        assert data["mistakes"][0] == {"word": "w0", "suggestion": "s0"}

    def test_json_with_attempt(self):
        result = ScoreResult(score=100)
        attempt = DictationAttempt("hi", "hi", result, segment_id=2)
        data = json.loads(format_score_json(result, attempt))
        assert data["segment_id"] == 2
        assert data["user_text"] == "hi"
