"""Output formatters for segment lists and score results."""

import json
from datetime import datetime, timezone

from .config import PracticeConfig
from .types import DictationAttempt, ScoreResult, TimeSegment

# Schema version for JSON output (for future compatibility)
JSON_SCHEMA_VERSION = "1.0"


def format_time(seconds: float) -> str:
    """Format seconds as M:SS (minutes are not wrapped into hours)."""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def format_range(segment: TimeSegment) -> str:
    return f"{format_time(segment.start)} - {format_time(segment.end)}"


def feedback_label(score: int, config: PracticeConfig = PracticeConfig()) -> str:
    """Short verdict shown next to a score."""
    if score >= config.excellent_threshold:
        return "Excellent!"
    if score >= config.good_threshold:
        return "Good!"
    return "Needs improvement"


def score_style(score: int, config: PracticeConfig = PracticeConfig()) -> str:
    """Rich style for an attempt score."""
    if score >= config.excellent_threshold:
        return "green"
    if score >= config.good_threshold:
        return "yellow"
    return "red"


def segment_badge_style(score: int, config: PracticeConfig = PracticeConfig()) -> str:
    """Rich style for a per-segment score badge."""
    if score >= config.segment_pass_threshold:
        return "green"
    if score >= config.segment_warn_threshold:
        return "yellow"
    return "red"


def format_segments_txt(
    segments: list[TimeSegment],
    texts: dict[int, str] | None = None,
) -> str:
    """
    Format segments as plain text, one per line.

    Args:
        segments: Segments to list
        texts: Optional reference text per segment id

    Returns:
        Lines like ``Segment 1: 0:00 - 0:15`` with an indented text line when known
    """
    lines = []
    for index, segment in enumerate(segments, start=1):
        line = f"Segment {index}: {format_range(segment)}"
        if segment.score is not None:
            line += f" [{segment.score}/100]"
        lines.append(line)
        if texts is not None:
            lines.append(f"    {texts.get(segment.id) or '(no reference text)'}")
    return "\n".join(lines)


def format_segments_json(
    segments: list[TimeSegment],
    texts: dict[int, str] | None = None,
    duration: float | None = None,
) -> str:
    """Format segments as structured JSON."""
    data = {
        "schema_version": JSON_SCHEMA_VERSION,
        "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "duration_seconds": duration,
        "segments": [
            {
                "id": seg.id,
                "start": round(seg.start, 3),
                "end": round(seg.end, 3),
                "duration": round(seg.duration, 3),
                "score": seg.score,
                **({"text": texts.get(seg.id, "")} if texts is not None else {}),
            }
            for seg in segments
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_score_txt(
    result: ScoreResult,
    config: PracticeConfig = PracticeConfig(),
    show_all_mistakes: bool = False,
) -> str:
    """
    Format a score result as plain text.

    Only the first ``config.mistake_display_limit`` mistakes are listed unless
    show_all_mistakes is set.
    """
    lines = [f"Score: {result.score}/100 ({feedback_label(result.score, config)})"]

    mistakes = result.mistakes
    if not show_all_mistakes:
        mistakes = mistakes[: config.mistake_display_limit]
    if mistakes:
        lines.append("Mistakes:")
        for mistake in mistakes:
            lines.append(f'  "{mistake.word}" -> "{mistake.suggestion}"')
        hidden = len(result.mistakes) - len(mistakes)
        if hidden:
            lines.append(f"  ... and {hidden} more")

    return "\n".join(lines)


def format_score_json(result: ScoreResult, attempt: DictationAttempt | None = None) -> str:
    """Format a score result (and optionally its attempt) as JSON. Lists every mistake."""
    data: dict = {
        "schema_version": JSON_SCHEMA_VERSION,
        "score": result.score,
        "mistakes": [
            {"word": m.word, "suggestion": m.suggestion} for m in result.mistakes
        ],
    }
    if attempt is not None:
        data["segment_id"] = attempt.segment_id
        data["reference_text"] = attempt.reference_text
        data["user_text"] = attempt.user_text
    return json.dumps(data, indent=2, ensure_ascii=False)


FORMATS = ("txt", "json")
