"""Media file checks and duration probing.

Segments are cut from the media duration, so the probe only reports a
duration the segment partitioner can use: finite and above zero.
"""

import json
import math
import shutil
import subprocess
from pathlib import Path

# Containers ffprobe/ffplay handle for dictation practice
VIDEO_EXTENSIONS = frozenset({
    ".mp4", ".mkv", ".mov", ".webm", ".avi", ".m4v"
})
AUDIO_EXTENSIONS = frozenset({
    ".wav", ".mp3", ".m4a", ".flac", ".ogg", ".aac"
})
SUPPORTED_EXTENSIONS = VIDEO_EXTENSIONS | AUDIO_EXTENSIONS

PROBE_TIMEOUT = 10


def is_supported_media(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def find_ffprobe() -> str | None:
    """Path of the ffprobe executable, or None when ffmpeg is not installed."""
    return shutil.which("ffprobe")


def parse_probe_duration(output: str) -> float | None:
    """
    Read ``format.duration`` from ffprobe JSON output.

    ffprobe prints ``N/A``, ``nan`` or ``0`` for inputs it cannot time
    (still images, broken headers, live streams); those give None.
    """
    try:
        seconds = float(json.loads(output)["format"]["duration"])
    except (json.JSONDecodeError, KeyError, TypeError, ValueError):
        return None
    if not math.isfinite(seconds) or seconds <= 0:
        return None
    return seconds


def get_media_duration(path: Path) -> float | None:
    """
    Probe the playable length of a media file in seconds.

    Returns None when ffprobe is missing, fails, times out, or reports a
    duration that cannot be split into segments.
    """
    ffprobe = find_ffprobe()
    if ffprobe is None:
        return None

    command = [
        ffprobe,
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "json",
        str(path),
    ]
    try:
        result = subprocess.run(
            command, capture_output=True, text=True, timeout=PROBE_TIMEOUT
        )
    except (subprocess.TimeoutExpired, OSError):
        return None

    if result.returncode != 0:
        return None
    return parse_probe_duration(result.stdout)
