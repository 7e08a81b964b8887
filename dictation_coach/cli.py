"""CLI interface for dictation practice."""

import warnings
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import DEFAULT_SEGMENT_LENGTH, SEGMENT_LENGTH_CHOICES, PracticeConfig
from .errors import ApproximationCaveat, DictationError
from .formatters import (
    FORMATS,
    format_range,
    format_score_json,
    format_score_txt,
    format_segments_json,
    format_segments_txt,
    score_style,
    segment_badge_style,
)
from .media import SUPPORTED_EXTENSIONS, find_ffprobe, get_media_duration, is_supported_media
from .playback import FfplayPlayer, is_ffplay_available
from .scoring import score as score_text
from .segments import resolve_active_segment
from .session import DictationSession
from .transcripts import TRANSCRIPT_EXTENSIONS, load_transcript, read_text_file, save_transcript
from .types import DictationAttempt, TimeSegment, Transcript

app = typer.Typer(
    name="dictate",
    help="Practice dictation against fixed-length segments of a video.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

HELP_TEXT = (
    "Type what you heard and press Enter to check it.\n"
    "Commands: :n next, :p previous, :r replay, :j N jump to segment N, "
    ":s show reference, :l list segments, :q quit"
)


def _echo(text: str, style: str | None = None) -> None:
    """Print text verbatim (no markup, no wrapping)."""
    console.print(text, style=style, markup=False, emoji=False, highlight=False, soft_wrap=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"dictate {__version__}")
        raise typer.Exit()


def _validate_length(length: int) -> int:
    if length not in SEGMENT_LENGTH_CHOICES:
        raise typer.BadParameter(
            f"Must be one of: {', '.join(str(c) for c in SEGMENT_LENGTH_CHOICES)}",
            param_hint="--length",
        )
    return length


def _validate_format(format: str) -> str:
    fmt = format.strip().lower()
    if fmt not in FORMATS:
        raise typer.BadParameter(
            f"Unknown format '{format}'. Must be one of: {', '.join(FORMATS)}",
            param_hint="--format",
        )
    return fmt


def _resolve_duration(media: Path | None, duration: float | None) -> float:
    """Take --duration if given, otherwise probe the media file.

    Raises:
        typer.BadParameter: If neither is usable.
        typer.Exit: If probing fails.
    """
    if duration is not None:
        if duration <= 0:
            raise typer.BadParameter("Must be greater than 0", param_hint="--duration")
        return duration

    if media is None:
        raise typer.BadParameter(
            "Provide a media file or --duration",
            param_hint="--duration",
        )

    if not is_supported_media(media):
        raise typer.BadParameter(
            f"Unsupported media file '{media.name}'. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}",
            param_hint="MEDIA",
        )

    if find_ffprobe() is None:
        err_console.print("[red]ffprobe not found; cannot read the media duration.[/red]")
        err_console.print("[yellow]Install ffmpeg or pass --duration.[/yellow]")
        raise typer.Exit(1)

    probed = get_media_duration(media)
    if probed is None:
        err_console.print(f"[red]Could not read the duration of {media}.[/red]")
        raise typer.Exit(1)
    return probed


def _load_transcript_option(path: Path | None) -> Transcript | None:
    if path is None:
        return None
    try:
        return load_transcript(path)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--transcript")


def _read_text_option(
    text: str | None,
    text_file: Path | None,
    name: str,
) -> str:
    """Pick exactly one of --NAME / --NAME-file."""
    if text is not None and text_file is not None:
        raise typer.BadParameter(
            f"Use either --{name} or --{name}-file, not both",
            param_hint=f"--{name}",
        )
    if text_file is not None:
        return read_text_file(text_file)
    if text is None:
        raise typer.BadParameter(
            f"Provide --{name} or --{name}-file",
            param_hint=f"--{name}",
        )
    return text


def _build_session(
    media: Path | None,
    duration: float | None,
    length: int,
    transcript: Path | None,
    verbose: bool = False,
) -> DictationSession:
    """Resolve inputs and return a session with segments (and transcript) loaded."""
    _validate_length(length)
    loaded = _load_transcript_option(transcript)
    total = _resolve_duration(media, duration)

    session = DictationSession(PracticeConfig(segment_length=length))
    session.load_media(total)
    if loaded is not None:
        session.set_transcript(loaded)
        if loaded.is_empty:
            err_console.print(f"[yellow]Warning: {transcript} is empty; no reference text.[/yellow]")

    if verbose:
        console.print(
            f"[dim]Duration {total:.2f}s, {len(session.segments)} segment(s) of {length}s[/dim]"
        )
        if loaded is not None:
            kind = "timed cues" if loaded.is_timed else "uniform-rate estimate"
            console.print(f"[dim]Reference text from {transcript} ({kind})[/dim]")

    return session


def _segment_texts(session: DictationSession) -> dict[int, str]:
    return {seg.id: session.segment_reference_text(seg) for seg in session.segments}


def _print_segment_table(session: DictationSession) -> None:
    """Show all segments with their scores, marking the current one."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Time")
    table.add_column("Score", justify="right")

    active = session.active_segment
    for index, segment in enumerate(session.segments, start=1):
        marker = "▶ " if active is not None and segment.id == active.id else ""
        if segment.score is None:
            score_cell = "[dim]-[/dim]"
        else:
            style = segment_badge_style(segment.score, session.config)
            score_cell = f"[{style}]{segment.score}[/{style}]"
        table.add_row(f"{marker}{index}", format_range(segment), score_cell)

    console.print(table)


def _print_attempt(attempt: DictationAttempt, config: PracticeConfig) -> None:
    _echo(format_score_txt(attempt.result, config), style=score_style(attempt.score, config))


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Practice dictation against fixed-length segments of a video."""


@app.command()
def segments(
    media: Annotated[
        Path | None,
        typer.Argument(help="Video or audio file (duration read with ffprobe)", exists=True),
    ] = None,
    duration: Annotated[
        float | None,
        typer.Option("--duration", "-d", help="Media duration in seconds (skips ffprobe)"),
    ] = None,
    length: Annotated[
        int,
        typer.Option("--length", "-l", help="Segment length in seconds: 10, 15 or 30"),
    ] = DEFAULT_SEGMENT_LENGTH,
    transcript: Annotated[
        Path | None,
        typer.Option(
            "--transcript", "-t",
            help=f"Transcript file ({', '.join(sorted(TRANSCRIPT_EXTENSIONS))})",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: txt or json"),
    ] = "txt",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """List practice segments, optionally with their reference text."""
    fmt = _validate_format(format)
    session = _build_session(media, duration, length, transcript, verbose)
    texts = _segment_texts(session) if transcript is not None else None

    if fmt == "json":
        _echo(format_segments_json(session.segments, texts, session.duration))
    else:
        _echo(format_segments_txt(session.segments, texts))


@app.command()
def locate(
    time: Annotated[
        float,
        typer.Option("--time", help="Playback time in seconds"),
    ],
    media: Annotated[
        Path | None,
        typer.Argument(help="Video or audio file (duration read with ffprobe)", exists=True),
    ] = None,
    duration: Annotated[
        float | None,
        typer.Option("--duration", "-d", help="Media duration in seconds (skips ffprobe)"),
    ] = None,
    length: Annotated[
        int,
        typer.Option("--length", "-l", help="Segment length in seconds: 10, 15 or 30"),
    ] = DEFAULT_SEGMENT_LENGTH,
    transcript: Annotated[
        Path | None,
        typer.Option(
            "--transcript", "-t",
            help="Transcript file to show the segment's reference text",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Show which segment is active at a playback time."""
    session = _build_session(media, duration, length, transcript)
    segment = resolve_active_segment(time, session.segments)

    if segment is None:
        console.print(f"No segment at {time:g}s (media is {session.duration:g}s long)")
        return

    console.print(
        f"Segment {segment.id + 1}/{len(session.segments)}: {format_range(segment)}"
    )
    if transcript is not None:
        _echo(session.segment_reference_text(segment) or "(no reference text)")


@app.command()
def score(
    reference: Annotated[
        str | None,
        typer.Option("--reference", "-r", help="Reference text"),
    ] = None,
    reference_file: Annotated[
        Path | None,
        typer.Option("--reference-file", help="File containing the reference text", exists=True, dir_okay=False),
    ] = None,
    text: Annotated[
        str | None,
        typer.Option("--text", help="What you typed"),
    ] = None,
    text_file: Annotated[
        Path | None,
        typer.Option("--text-file", help="File containing what you typed", exists=True, dir_okay=False),
    ] = None,
    all_mistakes: Annotated[
        bool,
        typer.Option("--all-mistakes", "-a", help="List every mistake, not just the first few"),
    ] = False,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: txt or json"),
    ] = "txt",
) -> None:
    """Score typed text against a reference text."""
    fmt = _validate_format(format)
    reference_text = _read_text_option(reference, reference_file, "reference")
    user_text = _read_text_option(text, text_file, "text")

    try:
        result = score_text(reference_text, user_text)
    except DictationError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if fmt == "json":
        attempt = DictationAttempt(reference_text=reference_text, user_text=user_text, result=result)
        _echo(format_score_json(result, attempt))
    else:
        config = PracticeConfig()
        _echo(
            format_score_txt(result, config, show_all_mistakes=all_mistakes),
            style=score_style(result.score, config),
        )


@app.command()
def transcript(
    source: Annotated[
        Path,
        typer.Argument(help="Transcript file (txt, srt, vtt or json)", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file or directory"),
    ] = Path("transcript.txt"),
) -> None:
    """Save a transcript as flat text."""
    loaded = _load_transcript_option(source)
    written = save_transcript(loaded.text, output)
    console.print(f"[green]✓[/green] {written}")


def _show_reference(session: DictationSession, full: bool) -> None:
    if full:
        _echo(session.transcript.text or "(no transcript loaded)", style="dim")
        return
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ApproximationCaveat)
        text = session.active_reference_text()
    for warning in caught:
        err_console.print(f"[yellow]{warning.message}[/yellow]")
    if text:
        _echo(text, style="dim")


def _handle_command(session: DictationSession, command: str, full: bool) -> bool:
    """Run a ':' command. Returns False when the learner wants to quit."""
    name, _, arg = command[1:].strip().partition(" ")
    name = name.lower()

    if name == "q":
        return False
    if name == "n":
        if session.next() is None:
            console.print("[yellow]Already at the last segment.[/yellow]")
    elif name == "p":
        if session.previous() is None:
            console.print("[yellow]Already at the first segment.[/yellow]")
    elif name == "r":
        session.play_current()
    elif name == "j":
        try:
            session.jump_to(int(arg) - 1)
        except (ValueError, IndexError):
            console.print(f"[yellow]Enter a segment number from 1 to {len(session.segments)}.[/yellow]")
    elif name == "s":
        _show_reference(session, full)
    elif name == "l":
        _print_segment_table(session)
    else:
        console.print(HELP_TEXT, markup=False)
    return True


def _print_summary(session: DictationSession) -> None:
    stats = session.stats
    console.print()
    if not stats.total_sessions:
        console.print("[dim]No attempts checked.[/dim]")
        return
    style = score_style(stats.average_score, session.config)
    console.print(
        f"[bold]Attempts:[/bold] {stats.total_sessions}  "
        f"[bold]Average score:[/bold] [{style}]{stats.average_score}/100[/{style}]  "
        f"[bold]Practice time:[/bold] {stats.total_time}"
    )


@app.command()
def practice(
    media: Annotated[
        Path | None,
        typer.Argument(help="Video or audio file to practice with", exists=True),
    ] = None,
    transcript: Annotated[
        Path | None,
        typer.Option(
            "--transcript", "-t",
            help="Reference transcript (txt, srt, vtt or json)",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    duration: Annotated[
        float | None,
        typer.Option("--duration", "-d", help="Media duration in seconds (skips ffprobe)"),
    ] = None,
    length: Annotated[
        int,
        typer.Option("--length", "-l", help="Segment length in seconds: 10, 15 or 30"),
    ] = DEFAULT_SEGMENT_LENGTH,
    full: Annotated[
        bool,
        typer.Option("--full", help="Check against the whole transcript instead of one segment"),
    ] = False,
    play: Annotated[
        bool,
        typer.Option("--play/--no-play", help="Play each segment with ffplay"),
    ] = True,
    start: Annotated[
        int,
        typer.Option("--start", "-s", help="Segment number to start from", min=1),
    ] = 1,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """Practice dictation segment by segment."""
    if transcript is None:
        raise typer.BadParameter("A reference transcript is required", param_hint="--transcript")

    session = _build_session(media, duration, length, transcript, verbose)
    if not session.segments:
        err_console.print("[red]No segments to practice.[/red]")
        raise typer.Exit(1)
    if start > len(session.segments):
        raise typer.BadParameter(
            f"Only {len(session.segments)} segment(s) available",
            param_hint="--start",
        )

    if play and media is not None:
        if is_ffplay_available():
            session.navigator.playback = FfplayPlayer(media)
        else:
            err_console.print("[yellow]Warning: ffplay not found, playback disabled.[/yellow]")

    def announce(segment: TimeSegment) -> None:
        console.print(
            f"\n[bold cyan]Segment {segment.id + 1}/{len(session.segments)}[/bold cyan] "
            f"{format_range(segment)}"
        )

    session.navigator.on_segment_change = announce
    console.print(HELP_TEXT, markup=False)

    try:
        if start > 1:
            session.jump_to(start - 1)
        else:
            announce(session.active_segment)
            session.play_current()
    except RuntimeError as e:
        err_console.print(f"[yellow]{e}[/yellow]")

    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except EOFError:
            break

        try:
            if line.strip().startswith(":"):
                if not _handle_command(session, line.strip(), full):
                    break
                continue

            attempt = session.check(line, full_transcript=full)
            _print_attempt(attempt, session.config)
            if not full:
                if session.navigator.is_last:
                    console.print("[dim]Last segment checked. :j N to revisit, :q to finish.[/dim]")
                else:
                    session.next()
        except DictationError as e:
            err_console.print(f"[red]{e}[/red]")
        except RuntimeError as e:
            err_console.print(f"[yellow]{e}[/yellow]")

    _print_summary(session)


if __name__ == "__main__":
    app()
