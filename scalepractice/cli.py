"""scalepractice CLI entry point."""

import logging
import sys
from collections.abc import Callable
from typing import Any

import click

from scalepractice import __version__
from scalepractice.catalog import (
    DEFAULT_NOTE_DURATION,
    DEFAULT_RANGE,
    DEFAULT_TIME_SIGNATURE,
    DURATIONS,
    FORMULAS,
    ROOTS,
    SCALES,
    TIME_SIGNATURES,
)
from scalepractice.line import generate_line
from scalepractice.midi_exporter import MidiExporter
from scalepractice.orchestration import Feel, NoteDuration, Orchestration, orchestrate
from scalepractice.pitch import Pitch, display_pitch, to_scientific_pitch_notation
from scalepractice.playback import playback_keys, sample_urls
from scalepractice.scale import Range


def _parse_pitch(ctx: click.Context, param: click.Parameter, value: str) -> Pitch:
    """Click callback turning ``C#4`` into a Pitch."""
    try:
        return Pitch.parse(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _default_key(pitch: Pitch) -> str:
    return to_scientific_pitch_notation(pitch) or "C4"


_EXERCISE_OPTIONS: list[Callable[[Callable[..., Any]], Callable[..., Any]]] = [
    click.option("--root", type=click.Choice(sorted(ROOTS)), default="C", show_default=True,
                 help="Root of the scale."),
    click.option("--scale", "scale_name", type=click.Choice(sorted(SCALES)), default="major",
                 show_default=True, help="Scale to practise."),
    click.option("--formula", "formula_name", type=click.Choice(sorted(FORMULAS)),
                 default="steps-up", show_default=True, help="Melodic pattern to walk."),
    click.option("--invert", is_flag=True, help="Play the formula with every step reversed."),
    click.option("--start", type=click.Choice(sorted(ROOTS)), default=None, metavar="NOTE",
                 help="Pitch class to start on. Defaults to the root."),
    click.option("--low", type=str, default=_default_key(DEFAULT_RANGE.lowest),
                 show_default=True, callback=_parse_pitch, help="Lowest pitch of the range."),
    click.option("--high", type=str, default=_default_key(DEFAULT_RANGE.highest),
                 show_default=True, callback=_parse_pitch, help="Highest pitch of the range."),
    click.option("--time-signature", type=click.Choice(list(TIME_SIGNATURES)),
                 default=str(DEFAULT_TIME_SIGNATURE), show_default=True, help="Meter."),
    click.option("--duration", type=click.Choice(list(DURATIONS)),
                 default=DEFAULT_NOTE_DURATION.duration.name.lower(), show_default=True,
                 help="Note value used for every note."),
    click.option("--triplet", is_flag=True, help="Play the note value as triplets."),
]


def _exercise_options(func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_EXERCISE_OPTIONS):
        func = option(func)
    return func


def _build_exercise(
    root: str,
    scale_name: str,
    formula_name: str,
    invert: bool,
    start: str | None,
    low: Pitch,
    high: Pitch,
    time_signature: str,
    duration: str,
    triplet: bool,
) -> tuple[list[Pitch], Orchestration | None]:
    """Resolve CLI selections and run the engine."""
    formula = FORMULAS[formula_name]
    if invert:
        formula = formula.invert()
    line = generate_line(
        Range(low, high),
        SCALES[scale_name],
        formula,
        ROOTS[root],
        ROOTS[start or root],
    )
    note_duration = NoteDuration(DURATIONS[duration], Feel.TRIPLET if triplet else Feel.NONE)
    return line, orchestrate(TIME_SIGNATURES[time_signature], note_duration, line)


def _require_line(line: list[Pitch]) -> None:
    if not line:
        click.echo(
            "  WARNING: The selection produced no notes. "
            "Check that the start note is in the scale and the range is not reversed.",
            err=True,
        )
        sys.exit(1)


def _require_orchestration(line: list[Pitch], orchestration: Orchestration | None) -> Orchestration:
    _require_line(line)
    if orchestration is None:
        click.echo(
            "  WARNING: That note value cannot fill the chosen time signature exactly.",
            err=True,
        )
        sys.exit(1)
    return orchestration


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="scalepractice")
@click.option("--verbose", "-v", is_flag=True, help="Log engine decisions to stderr.")
def main(verbose: bool) -> None:
    """scalepractice — scale exercises as melodic lines, sheet music and MIDI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ── line subcommand ────────────────────────────────────────────────────────────

@main.command()
@_exercise_options
@click.option(
    "--samples",
    "samples_url",
    default=None,
    metavar="BASE_URL",
    help="Also list the sample file URL a sampler would load for each key.",
)
def line(samples_url: str | None, **options: Any) -> None:
    """
    Print the melodic line and how it falls into measures.

    \b
    Examples:
      scalepractice line --root C --scale major-pentatonic
      scalepractice line --root Bb --formula thirds-down --start D --low Bb2 --high F5
      scalepractice line --root F --samples https://example.org/piano
    """
    pitches, orchestration = _build_exercise(**options)
    _require_line(pitches)

    click.echo("Line : " + " ".join(display_pitch(pitch) for pitch in pitches))
    keys = playback_keys(pitches)
    click.echo("Keys : " + " ".join(keys))
    if samples_url is not None:
        click.echo("Samples:")
        for key, url in sample_urls(keys, samples_url).items():
            click.echo(f"  {key:<4} {url}")
    if orchestration is None:
        click.echo("Measures : not representable in this meter")
        return

    click.echo(f"Measures ({orchestration.time_signature}):")
    for number, measure in enumerate(orchestration.measures, start=1):
        tokens = [
            "-" if event.pitch is None else display_pitch(event.pitch)
            for event in measure.events
        ]
        click.echo(f"  {number:3d} | " + " ".join(tokens))


# ── sheet subcommand ───────────────────────────────────────────────────────────

@main.command()
@_exercise_options
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination sheet file path. Defaults to exercise.<ext> based on --format.",
)
@click.option(
    "--title",
    default=None,
    metavar="TEXT",
    help="Title shown in the output header. Defaults to the root and scale.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "md-vexflow"], case_sensitive=False),
    default="md-vexflow",
    show_default=True,
    help="Sheet output format: Markdown with VexFlow script or self-contained HTML (verovio).",
)
def sheet(output: str | None, title: str | None, output_format: str, **options: Any) -> None:
    """
    Render the exercise as sheet music output (Markdown or HTML).

    \b
    Examples:
      scalepractice sheet --root G --scale major -o g_major.md
      scalepractice sheet --root A --scale minor-pentatonic --triplet --format html
    """
    from scalepractice.sheet_exporter import SheetExporter

    pitches, orchestration = _build_exercise(**options)
    orchestration = _require_orchestration(pitches, orchestration)

    normalized_format = output_format.lower()
    resolved_title = title if title is not None else f"{options['root']} {SCALES[options['scale_name']].name}"
    resolved_output = output if output is not None else (
        "exercise.html" if normalized_format == "html" else "exercise.md"
    )

    click.echo(f"scalepractice v{__version__}")
    click.echo(f"  Format : {normalized_format}")
    click.echo(f"  Title  : {resolved_title}")
    click.echo(f"  Output : {resolved_output}")

    exporter = SheetExporter(title=resolved_title, output_format=normalized_format)
    try:
        exporter.export(orchestration, resolved_output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"  ERROR: Could not render score — {exc}", err=True)
        sys.exit(1)

    click.echo(f"Done!  Wrote {len(orchestration.measures)} measure(s) to '{resolved_output}'.")


# ── midi subcommand ────────────────────────────────────────────────────────────

@main.command()
@_exercise_options
@click.option(
    "--output",
    "-o",
    default="exercise.mid",
    show_default=True,
    metavar="PATH",
    help="Destination MIDI file path.",
)
@click.option(
    "--tempo",
    type=click.IntRange(20, 300),
    default=MidiExporter.DEFAULT_TEMPO,
    show_default=True,
    help="Playback tempo in BPM.",
)
def midi(output: str, tempo: int, **options: Any) -> None:
    """
    Write the exercise as a MIDI file for any MIDI player.

    \b
    Examples:
      scalepractice midi --root D --scale dorian --formula fours-up
      scalepractice midi --root E --duration sixteenth --tempo 60 -o e_major.mid
    """
    pitches, orchestration = _build_exercise(**options)
    orchestration = _require_orchestration(pitches, orchestration)

    exporter = MidiExporter(tempo=tempo)
    try:
        exporter.export(orchestration, output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write MIDI file — {exc}", err=True)
        sys.exit(1)

    click.echo(f"Done!  Wrote {len(pitches)} note(s) to '{output}'.")
