"""Dictation practice types.

Contains dataclasses shared between the segment engine, the scorer and the
session that ties them together.
"""

from dataclasses import dataclass, field


@dataclass
class TimeSegment:
    """A fixed-length practice window of the source video."""

    id: int
    start: float  # seconds
    end: float  # seconds
    score: int | None = None  # set once an attempt on this segment completes

    @property
    def duration(self) -> float:
        return self.end - self.start

    def contains(self, time: float) -> bool:
        """Half-open membership: start <= time < end."""
        return self.start <= time < self.end


@dataclass(frozen=True)
class Mistake:
    """A position where the typed word differs from the reference word."""

    word: str
    suggestion: str


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of scoring one attempt."""

    score: int  # 0-100
    mistakes: tuple[Mistake, ...] = ()


@dataclass(frozen=True)
class DictationAttempt:
    """One scored attempt. Superseded, never merged, by the next attempt."""

    reference_text: str
    user_text: str
    result: ScoreResult
    segment_id: int | None = None  # None when scored against the full transcript

    @property
    def score(self) -> int:
        return self.result.score


@dataclass
class TimedCue:
    """A transcript line with real timing, as emitted by subtitle-capable STT."""

    text: str
    start: float  # seconds
    end: float  # seconds

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2


@dataclass
class Transcript:
    """Reference transcript.

    ``text`` is always the flat transcript. ``cues`` is empty unless the source
    carried timestamps.
    """

    text: str
    cues: list[TimedCue] = field(default_factory=list)

    @property
    def is_timed(self) -> bool:
        return bool(self.cues)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
