"""Mapping practice segments to slices of the reference transcript.

A flat transcript has no word timings, so a segment's text is estimated by
assuming words are spoken at a uniform rate over the whole media. Adjacent
windows can overlap or skip a word because each bound is floored on its own.

When the transcript carries timed cues, the cues are used directly instead.
"""

import math

from .errors import ConfigurationError
from .types import TimeSegment, Transcript


def split_words(text: str) -> list[str]:
    """Split text on runs of whitespace, dropping empty pieces."""
    return text.split()


def map_window(segment: TimeSegment, transcript: str, duration: float) -> str:
    """
    Approximate the part of a flat transcript spoken during ``segment``.

    Args:
        segment: Segment whose bounds select the window
        transcript: Full transcript as plain text
        duration: Total media duration in seconds

    Returns:
        Words in the window joined by single spaces. Empty for an empty transcript.

    Raises:
        ConfigurationError: If duration is not positive
    """
    if duration <= 0:
        raise ConfigurationError(f"duration must be positive, got {duration}")

    words = split_words(transcript)
    if not words:
        return ""

    words_per_second = len(words) / duration
    start_index = math.floor(segment.start * words_per_second)
    end_index = math.floor(segment.end * words_per_second)

    start_index = min(max(start_index, 0), len(words))
    end_index = min(max(end_index, start_index), len(words))

    return " ".join(words[start_index:end_index])


def cue_window(segment: TimeSegment, transcript: Transcript) -> str:
    """Join the cues whose midpoint falls inside the segment."""
    texts = [
        " ".join(split_words(cue.text))
        for cue in transcript.cues
        if segment.contains(cue.midpoint)
    ]
    return " ".join(text for text in texts if text)


def reference_text(segment: TimeSegment, transcript: Transcript, duration: float) -> str:
    """
    Reference text for a segment.

    Uses real cue timings when the transcript has them, otherwise falls back to
    the uniform-rate estimate of map_window.
    """
    if transcript.is_timed:
        return cue_window(segment, transcript)
    return map_window(segment, transcript.text, duration)
