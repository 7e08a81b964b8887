"""Practice session: the single owner of navigation, transcript and stats."""

import warnings

from .config import PracticeConfig
from .errors import ApproximationCaveat, ConfigurationError, ValidationError
from .navigation import SegmentListener, SegmentNavigator
from .playback import PlaybackController
from .scoring import score, validate_user_input
from .segments import partition
from .stats import SessionStats
from .transcript_window import reference_text
from .types import DictationAttempt, TimeSegment, Transcript


class DictationSession:
    """
    Coordinates one learner practicing against one video.

    Media metadata (``load_media``) and configuration changes
    (``set_segment_length``) rebuild the segment list. Playback ticks and
    navigation go through the navigator. ``check`` scores an attempt and is the
    only place stats and segment scores change.
    """

    def __init__(
        self,
        config: PracticeConfig | None = None,
        playback: PlaybackController | None = None,
        on_segment_change: SegmentListener | None = None,
    ):
        self.config = config or PracticeConfig()
        self.navigator = SegmentNavigator(on_segment_change=on_segment_change, playback=playback)
        self.stats = SessionStats()
        self.transcript = Transcript(text="")
        self.duration = 0.0
        self.last_attempt: DictationAttempt | None = None

    @property
    def segments(self) -> list[TimeSegment]:
        return self.navigator.segments

    @property
    def active_segment(self) -> TimeSegment | None:
        return self.navigator.active_segment

    def _regenerate(self) -> TimeSegment | None:
        try:
            segments = partition(self.duration, self.config.segment_length)
        except ConfigurationError as e:
            warnings.warn(f"{e}; no segments generated", stacklevel=3)
            segments = []
        return self.navigator.regenerate(segments)

    def load_media(self, duration: float) -> TimeSegment | None:
        """Accept the media duration and build the segment list."""
        self.duration = max(float(duration), 0.0)
        return self._regenerate()

    def set_segment_length(self, segment_length: float) -> TimeSegment | None:
        """Change segment length. Existing segments and their scores are discarded."""
        self.config = self.config.with_segment_length(segment_length)
        return self._regenerate()

    def set_transcript(self, transcript: Transcript | str) -> None:
        if isinstance(transcript, str):
            transcript = Transcript(text=transcript)
        self.transcript = transcript

    def on_time_update(self, time: float) -> TimeSegment | None:
        return self.navigator.on_time_update(time)

    def previous(self) -> TimeSegment | None:
        return self.navigator.previous()

    def next(self) -> TimeSegment | None:
        return self.navigator.next()

    def jump_to(self, index: int) -> TimeSegment:
        return self.navigator.jump_to(index)

    def play_current(self) -> TimeSegment | None:
        return self.navigator.play_current()

    def segment_reference_text(self, segment: TimeSegment) -> str:
        """Reference text for any segment of this session."""
        if self.duration <= 0:
            return ""
        return reference_text(segment, self.transcript, self.duration)

    def active_reference_text(self) -> str:
        """
        Reference text for the active segment.

        Warns with ApproximationCaveat when no text is available so callers can
        tell the learner instead of scoring against nothing.
        """
        segment = self.active_segment
        text = self.segment_reference_text(segment) if segment is not None else ""
        if not text:
            warnings.warn(
                "No reference text available for this segment. Load a transcript first.",
                ApproximationCaveat,
                stacklevel=2,
            )
        return text

    def check(self, user_text: str, full_transcript: bool = False) -> DictationAttempt:
        """
        Score an attempt against the active segment (or the whole transcript).

        Args:
            user_text: What the learner typed
            full_transcript: Score against the full transcript instead of the
                active segment's window

        Returns:
            The scored attempt

        Raises:
            ValidationError: If the input is blank or there is no reference text.
                Nothing is recorded in that case.
        """
        validate_user_input(user_text)

        segment = None if full_transcript else self.active_segment
        if full_transcript:
            reference = self.transcript.text
        elif segment is None:
            reference = ""
        else:
            reference = self.segment_reference_text(segment)

        if not reference.strip():
            raise ValidationError("No reference text available for this segment.")

        result = score(reference, user_text)
        attempt = DictationAttempt(
            reference_text=reference,
            user_text=user_text,
            result=result,
            segment_id=segment.id if segment is not None else None,
        )

        if segment is not None:
            segment.score = result.score
        self.stats.record(result.score)
        self.last_attempt = attempt
        return attempt
