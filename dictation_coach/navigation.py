"""Tracking which practice segment is current.

The navigator is driven either by playback time (``on_time_update``) or by
the learner (``previous``, ``next``, ``jump_to``). Events must be handled one
at a time; each call finishes its transition, including notification, before
returning.
"""

from collections.abc import Callable, Sequence

from .playback import PlaybackController
from .segments import resolve_active_index
from .types import TimeSegment

SegmentListener = Callable[[TimeSegment], None]


class SegmentNavigator:
    """
    Current-segment state machine.

    Starts with no segments and no active segment. ``regenerate`` replaces the
    segment list wholesale and resets to the first segment.
    """

    def __init__(
        self,
        on_segment_change: SegmentListener | None = None,
        playback: PlaybackController | None = None,
    ):
        """
        Args:
            on_segment_change: Called with the new active segment on every change
            playback: Receives "play this range" requests on explicit navigation
        """
        self.on_segment_change = on_segment_change
        self.playback = playback
        self.segments: list[TimeSegment] = []
        self.current_index = 0

    @property
    def active_segment(self) -> TimeSegment | None:
        if not self.segments:
            return None
        return self.segments[self.current_index]

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index >= len(self.segments) - 1

    def _emit(self) -> TimeSegment:
        segment = self.segments[self.current_index]
        if self.on_segment_change is not None:
            self.on_segment_change(segment)
        return segment

    def _request_playback(self, segment: TimeSegment) -> None:
        if self.playback is not None:
            self.playback.play_range(segment.start, segment.end)

    def regenerate(self, segments: Sequence[TimeSegment]) -> TimeSegment | None:
        """Replace the segment list and make the first segment active."""
        self.segments = list(segments)
        self.current_index = 0
        if not self.segments:
            return None
        return self._emit()

    def on_time_update(self, time: float) -> TimeSegment | None:
        """
        Follow playback time.

        Returns the new active segment if it changed, None otherwise. A time
        outside every segment leaves the state as it is.
        """
        index = resolve_active_index(time, self.segments)
        if index is None or index == self.current_index:
            return None
        self.current_index = index
        return self._emit()

    def previous(self) -> TimeSegment | None:
        """Step back one segment and play it. No-op on the first segment."""
        if not self.segments or self.is_first:
            return None
        self.current_index -= 1
        segment = self._emit()
        self._request_playback(segment)
        return segment

    def next(self) -> TimeSegment | None:
        """Step forward one segment and play it. No-op on the last segment."""
        if not self.segments or self.is_last:
            return None
        self.current_index += 1
        segment = self._emit()
        self._request_playback(segment)
        return segment

    def jump_to(self, index: int) -> TimeSegment:
        """
        Make segment ``index`` active and play it.

        Raises:
            IndexError: If index is outside the segment list
        """
        if not 0 <= index < len(self.segments):
            raise IndexError(
                f"Segment index {index} out of range (0-{len(self.segments) - 1})"
            )
        self.current_index = index
        segment = self._emit()
        self._request_playback(segment)
        return segment

    def play_current(self) -> TimeSegment | None:
        """Replay the active segment without changing it."""
        segment = self.active_segment
        if segment is not None:
            self._request_playback(segment)
        return segment
