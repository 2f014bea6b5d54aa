"""Unit tests for applying formulas to range-bounded scales."""

from scalepractice.catalog import DEFAULT_RANGE, MAJOR, MAJOR_PENTATONIC
from scalepractice.formula import Formula
from scalepractice.line import apply_formula, generate_line, starting_index
from scalepractice.orchestration import Duration, NoteDuration, TimeSignature, orchestrate
from scalepractice.pitch import Pitch, PitchClass
from scalepractice.scale import Range, Scale, scale_pitches

C = PitchClass.parse("C")


def _range(low: str, high: str) -> Range:
    return Range(Pitch.parse(low), Pitch.parse(high))


def _line(*names: str) -> list[Pitch]:
    return [Pitch.parse(name) for name in names]


def test_single_step_formula_yields_two_pitches() -> None:
    line = generate_line(_range("C3", "B6"), MAJOR_PENTATONIC, Formula.of(1), C, C)
    assert line == _line("C3", "D3")


def test_formula_steps_are_cumulative_scale_degrees() -> None:
    line = generate_line(
        _range("C4", "C5"), MAJOR, Formula.of(2, -1, 2, -1), C, PitchClass.parse("G")
    )
    assert line == _line("G4", "B4", "A4", "C5", "B4")


def test_walk_below_the_range_drops_the_remainder() -> None:
    line = generate_line(DEFAULT_RANGE, MAJOR, Formula.of(-2, -1, 2, -1), C, PitchClass.parse("E"))
    assert line == _line("E3", "C3")


def test_steps_after_leaving_the_range_are_not_replayed() -> None:
    pitches = scale_pitches(_range("C4", "C5"), Scale(C, MAJOR))
    assert apply_formula(pitches, Formula.of(1, 10, -10), 0) == _line("C4", "D4")


def test_starting_note_outside_scale_yields_empty_line() -> None:
    line = generate_line(DEFAULT_RANGE, MAJOR, Formula.of(1, 1), C, PitchClass.parse("F#"))
    assert line == []


def test_starting_note_matches_enharmonically() -> None:
    d = PitchClass.parse("D")
    pitches = scale_pitches(_range("D4", "D5"), Scale(d, MAJOR))
    assert starting_index(pitches, PitchClass.parse("Db")) == 6


def test_starting_note_uses_first_occurrence() -> None:
    line = generate_line(DEFAULT_RANGE, MAJOR, Formula(()), C, PitchClass.parse("A"))
    assert line == _line("A3")


def test_empty_range_yields_empty_line_and_no_orchestration() -> None:
    line = generate_line(_range("C5", "C4"), MAJOR, Formula.of(1, 1), C, C)
    assert line == []
    assert orchestrate(TimeSignature(4, Duration.QUARTER), NoteDuration(Duration.EIGHTH), line) is None


def test_inverted_formula_walks_down_from_a_high_start() -> None:
    line = generate_line(_range("C4", "C5"), MAJOR, Formula.of(1, 1, 1).invert(), C, PitchClass.parse("F"))
    assert line == _line("F4", "E4", "D4", "C4")
