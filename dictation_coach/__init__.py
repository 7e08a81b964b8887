"""Dictation practice against fixed-length segments of a video.

This package provides:
- partition / resolve_active_segment for the segment timeline
- map_window / reference_text for a segment's approximate reference text
- score for positional word-by-word scoring of typed text
- SegmentNavigator for tracking the current segment
- DictationSession tying the above together with running stats
"""

__version__ = "0.1.0"

from .config import DEFAULT_SEGMENT_LENGTH, SEGMENT_LENGTH_CHOICES, PracticeConfig
from .errors import ApproximationCaveat, ConfigurationError, DictationError, ValidationError
from .navigation import SegmentNavigator
from .playback import PlaybackController
from .scoring import score
from .segments import partition, resolve_active_segment
from .session import DictationSession
from .stats import SessionStats
from .transcript_window import map_window, reference_text
from .types import (
    DictationAttempt,
    Mistake,
    ScoreResult,
    TimedCue,
    TimeSegment,
    Transcript,
)

__all__ = [
    "ApproximationCaveat",
    "ConfigurationError",
    "DEFAULT_SEGMENT_LENGTH",
    "DictationAttempt",
    "DictationError",
    "DictationSession",
    "Mistake",
    "PlaybackController",
    "PracticeConfig",
    "SEGMENT_LENGTH_CHOICES",
    "ScoreResult",
    "SegmentNavigator",
    "SessionStats",
    "TimeSegment",
    "TimedCue",
    "Transcript",
    "ValidationError",
    "map_window",
    "partition",
    "reference_text",
    "resolve_active_segment",
    "score",
]
