"""Playback contracts for segment practice.

Navigation never reaches the media player through global lookup; it holds a
PlaybackController and asks it to play a time range.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class PlaybackController(Protocol):
    """Protocol for anything that can play part of the media.

    Implementations must seek to ``start``, play, and stop at or after ``end``.
    """

    def play_range(self, start: float, end: float) -> None:
        """Play the media from ``start`` until ``end`` (seconds)."""
        ...


@dataclass(frozen=True)
class PlaybackWindow:
    """A ``[start, end)`` range handed to a player."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return max(self.end - self.start, 0.0)


def is_ffplay_available() -> bool:
    """Check if ffplay is available on the system."""
    return shutil.which("ffplay") is not None


class FfplayPlayer:
    """Plays segment ranges of a media file with ffplay (audio only).

    Each request blocks until ffplay exits at the end of the range.
    """

    def __init__(self, media_path: Path | str):
        self.media_path = Path(media_path)

    def build_command(self, window: PlaybackWindow) -> list[str]:
        ffplay = shutil.which("ffplay") or "ffplay"
        return [
            ffplay,
            "-nodisp",
            "-autoexit",
            "-loglevel", "quiet",
            "-ss", f"{window.start:.3f}",
            "-t", f"{window.duration:.3f}",
            str(self.media_path),
        ]

    def play_range(self, start: float, end: float) -> None:
        """
        Play ``[start, end)`` of the media file.

        Raises:
            RuntimeError: If ffplay is not installed or exits with an error
        """
        if not is_ffplay_available():
            raise RuntimeError("ffplay not found. Install ffmpeg to enable playback.")

        result = subprocess.run(
            self.build_command(PlaybackWindow(start, end)),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise RuntimeError(
                f"ffplay failed on {self.media_path} (exit code {result.returncode})"
            )
