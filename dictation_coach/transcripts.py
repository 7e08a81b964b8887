"""Loading and saving reference transcripts.

Speech-to-text runs elsewhere; this module only reads what it produced.
Plain text gives a flat transcript. SRT, WebVTT and the JSON written by the
transcription CLI also give timed cues.
"""

import io
import json
from pathlib import Path

import srt
import webvtt
from webvtt.errors import MalformedFileError

from .types import TimedCue, Transcript

TRANSCRIPT_EXTENSIONS = frozenset({".txt", ".srt", ".vtt", ".json"})

DEFAULT_TRANSCRIPT_NAME = "transcript.txt"


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file, dropping the byte order mark some editors write."""
    content = path.read_text(encoding="utf-8", errors="replace")
    if content.startswith("\ufeff"):
        content = content[1:]
    return content


def _clean(text: str) -> str:
    return " ".join(text.split())


def _from_cues(cues: list[TimedCue]) -> Transcript:
    cues = [cue for cue in cues if cue.text]
    return Transcript(text=" ".join(cue.text for cue in cues), cues=cues)


def parse_srt(content: str) -> Transcript:
    """Parse SubRip content into a timed transcript."""
    cues = [
        TimedCue(
            text=_clean(item.content or ""),
            start=item.start.total_seconds(),
            end=item.end.total_seconds(),
        )
        for item in srt.parse(content)
    ]
    return _from_cues(cues)


def _vtt_ts_to_seconds(ts: str) -> float:
    # HH:MM:SS.mmm, hours optional
    parts = ts.split(":")
    seconds = float(parts[-1])
    minutes = int(parts[-2]) if len(parts) >= 2 else 0
    hours = int(parts[-3]) if len(parts) >= 3 else 0
    return hours * 3600 + minutes * 60 + seconds


def parse_vtt(content: str) -> Transcript:
    """Parse WebVTT content into a timed transcript."""
    captions = webvtt.from_buffer(io.StringIO(content))
    cues = [
        TimedCue(
            text=_clean(caption.text or ""),
            start=_vtt_ts_to_seconds(caption.start),
            end=_vtt_ts_to_seconds(caption.end),
        )
        for caption in captions
    ]
    return _from_cues(cues)


def parse_json(content: str) -> Transcript:
    """
    Parse a JSON transcript.

    Accepts the transcription CLI schema (``text`` plus ``segments`` with
    ``text``/``start``/``end``). Without segments, only ``text`` is used.
    """
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("JSON transcript must be an object with 'text' or 'segments'")

    segments = data.get("segments") or []
    if segments:
        if not isinstance(segments, list):
            raise ValueError("'segments' must be a list of objects")
        cues = []
        for index, seg in enumerate(segments):
            if not isinstance(seg, dict):
                raise ValueError(f"segment {index} must be an object with 'text', 'start' and 'end'")
            cues.append(TimedCue(
                text=_clean(str(seg.get("text") or "")),
                start=float(seg["start"]),
                end=float(seg["end"]),
            ))
        return _from_cues(cues)

    return Transcript(text=_clean(str(data.get("text") or "")))


def load_transcript(path: Path) -> Transcript:
    """
    Load a transcript file, choosing the parser by extension.

    Raises:
        ValueError: If the extension is not supported or the file is malformed
    """
    suffix = path.suffix.lower()
    if suffix not in TRANSCRIPT_EXTENSIONS:
        raise ValueError(
            f"Unsupported transcript format '{suffix}'. "
            f"Use one of: {', '.join(sorted(TRANSCRIPT_EXTENSIONS))}"
        )

    content = read_text_file(path)
    if suffix == ".srt":
        try:
            return parse_srt(content)
        except srt.SRTParseError as e:
            raise ValueError(f"Malformed SRT file {path}: {e}") from e
    if suffix == ".vtt":
        try:
            return parse_vtt(content)
        except MalformedFileError as e:
            raise ValueError(f"Malformed WebVTT file {path}: {e}") from e
    if suffix == ".json":
        try:
            return parse_json(content)
        except (ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Malformed JSON transcript {path}: {e}") from e

    return Transcript(text=content.strip())


def save_transcript(text: str, path: Path) -> Path:
    """
    Write a flat transcript to disk.

    A directory path gets the default file name. Returns the written path.
    """
    if path.is_dir():
        path = path / DEFAULT_TRANSCRIPT_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
