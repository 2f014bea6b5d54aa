"""Unit tests for fitting lines into measures."""

from fractions import Fraction

import pytest

from scalepractice.orchestration import (
    Duration,
    Feel,
    NoteDuration,
    TimeSignature,
    notes_per_measure,
    orchestrate,
)
from scalepractice.pitch import Pitch

FOUR_FOUR = TimeSignature(4, Duration.QUARTER)
THREE_FOUR = TimeSignature(3, Duration.QUARTER)
SIX_EIGHT = TimeSignature(6, Duration.EIGHTH)
EIGHTHS = NoteDuration(Duration.EIGHTH, Feel.NONE)


def _line(*names: str) -> list[Pitch]:
    return [Pitch.parse(name) for name in names]


@pytest.mark.parametrize(
    ("time_signature", "note_duration", "expected"),
    [
        (FOUR_FOUR, EIGHTHS, 8),
        (FOUR_FOUR, NoteDuration(Duration.QUARTER), 4),
        (FOUR_FOUR, NoteDuration(Duration.SIXTEENTH), 16),
        (FOUR_FOUR, NoteDuration(Duration.EIGHTH, Feel.TRIPLET), 12),
        (FOUR_FOUR, NoteDuration(Duration.QUARTER, Feel.TRIPLET), 6),
        (SIX_EIGHT, NoteDuration(Duration.QUARTER), 3),
        (SIX_EIGHT, NoteDuration(Duration.EIGHTH, Feel.TRIPLET), 9),
        (THREE_FOUR, NoteDuration(Duration.QUARTER, Feel.TRIPLET), None),
        (THREE_FOUR, NoteDuration(Duration.WHOLE), None),
        (TimeSignature(2, Duration.QUARTER), NoteDuration(Duration.HALF, Feel.TRIPLET), None),
        (TimeSignature(0, Duration.QUARTER), EIGHTHS, None),
    ],
)
def test_notes_per_measure(
    time_signature: TimeSignature, note_duration: NoteDuration, expected: int | None
) -> None:
    assert notes_per_measure(time_signature, note_duration) == expected


def test_four_four_eighths_have_eight_slots_per_measure() -> None:
    line = _line("C4", "D4", "E4", "F4", "G4", "A4", "B4", "C5", "D5", "E5")
    orchestration = orchestrate(FOUR_FOUR, EIGHTHS, line)
    assert orchestration is not None
    assert [len(m.events) for m in orchestration.measures] == [8, 8]


def test_last_measure_is_padded_with_rests() -> None:
    line = _line("C4", "D4", "E4", "F4", "G4", "A4", "B4", "C5", "D5", "E5")
    orchestration = orchestrate(FOUR_FOUR, EIGHTHS, line)
    assert orchestration is not None
    last = orchestration.measures[-1].events
    assert [e.pitch for e in last[:2]] == _line("D5", "E5")
    assert all(e.is_rest for e in last[2:])
    assert [e.pitch for e in orchestration.events if not e.is_rest] == line


def test_every_measure_fills_the_meter_exactly() -> None:
    line = _line("C4", "D4", "E4", "F4", "G4")
    for time_signature, note_duration in [
        (FOUR_FOUR, NoteDuration(Duration.EIGHTH, Feel.TRIPLET)),
        (SIX_EIGHT, NoteDuration(Duration.SIXTEENTH)),
        (THREE_FOUR, NoteDuration(Duration.QUARTER)),
    ]:
        orchestration = orchestrate(time_signature, note_duration, line)
        assert orchestration is not None
        for measure in orchestration.measures:
            assert measure.length == time_signature.measure_length


def test_exact_fill_adds_no_rests() -> None:
    orchestration = orchestrate(THREE_FOUR, NoteDuration(Duration.QUARTER), _line("C4", "D4", "E4"))
    assert orchestration is not None
    assert len(orchestration.measures) == 1
    assert not any(e.is_rest for e in orchestration.events)


def test_empty_line_is_not_orchestrated() -> None:
    assert orchestrate(FOUR_FOUR, EIGHTHS, []) is None


def test_infeasible_triplets_are_not_orchestrated() -> None:
    triplets = NoteDuration(Duration.QUARTER, Feel.TRIPLET)
    assert orchestrate(THREE_FOUR, triplets, _line("C4", "D4")) is None


def test_lengths_are_exact_fractions() -> None:
    assert NoteDuration(Duration.EIGHTH, Feel.TRIPLET).length == Fraction(1, 12)
    assert SIX_EIGHT.measure_length == Fraction(3, 4)
    assert str(SIX_EIGHT) == "6/8"


def test_compound_meters() -> None:
    assert SIX_EIGHT.is_compound
    assert TimeSignature(12, Duration.EIGHTH).is_compound
    assert not FOUR_FOUR.is_compound
    assert not THREE_FOUR.is_compound
    assert not TimeSignature(3, Duration.EIGHTH).is_compound
