"""Segment partitioning and active-segment resolution."""

from collections.abc import Sequence

from .errors import ConfigurationError
from .types import TimeSegment


def partition(duration: float, segment_length: float) -> list[TimeSegment]:
    """
    Split a timeline into consecutive fixed-length segments.

    Every segment is ``segment_length`` long except possibly the last, which is
    cut at ``duration``. Ids run 0..n-1 in timeline order.

    Args:
        duration: Total length of the media in seconds
        segment_length: Length of each segment in seconds

    Returns:
        Ordered list of segments covering [0, duration). Empty when duration <= 0.

    Raises:
        ConfigurationError: If segment_length is not positive
    """
    if segment_length <= 0:
        raise ConfigurationError(f"segment_length must be positive, got {segment_length}")

    segments: list[TimeSegment] = []
    start = 0.0
    while start < duration:
        end = min(start + segment_length, duration)
        segments.append(TimeSegment(id=len(segments), start=start, end=end))
        start += segment_length

    return segments


def resolve_active_segment(
    time: float, segments: Sequence[TimeSegment]
) -> TimeSegment | None:
    """
    Find the segment whose half-open interval contains ``time``.

    A time before the first segment, or at/after the end of the last one,
    resolves to None.
    """
    for segment in segments:
        if segment.contains(time):
            return segment
    return None


def resolve_active_index(time: float, segments: Sequence[TimeSegment]) -> int | None:
    """Like resolve_active_segment, but returns the position in ``segments``."""
    for index, segment in enumerate(segments):
        if segment.contains(time):
            return index
    return None
