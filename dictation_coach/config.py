"""Practice configuration.

Segment length choices offered to the learner and the thresholds used when
presenting scores.
"""

from dataclasses import dataclass, replace

# Segment lengths offered by the CLI (seconds)
SEGMENT_LENGTH_CHOICES: tuple[int, ...] = (10, 15, 30)

DEFAULT_SEGMENT_LENGTH = 15


@dataclass(frozen=True)
class PracticeConfig:
    """Settings for a practice session.

    Only ``segment_length`` affects the engine; the rest is presentation.
    """

    segment_length: float = DEFAULT_SEGMENT_LENGTH
    """Length of each practice segment in seconds."""

    mistake_display_limit: int = 5
    """How many mistakes a result display shows. The scorer always returns all."""

    excellent_threshold: int = 90
    """Scores at or above this are reported as excellent."""

    good_threshold: int = 70
    """Scores at or above this (and below excellent) are reported as good."""

    segment_pass_threshold: int = 80
    """Segment badges at or above this are shown as passed."""

    segment_warn_threshold: int = 60
    """Segment badges at or above this (and below passed) are shown as borderline."""

    def with_segment_length(self, segment_length: float) -> "PracticeConfig":
        """Return a copy using a different segment length."""
        return replace(self, segment_length=segment_length)
