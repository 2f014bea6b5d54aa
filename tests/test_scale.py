"""Unit tests for range-bounded scale generation."""

import pytest

from scalepractice.catalog import MAJOR, MAJOR_PENTATONIC, SCALES
from scalepractice.pitch import Pitch, PitchClass
from scalepractice.scale import Range, Scale, ScaleDef, scale_pitches


def _range(low: str, high: str) -> Range:
    return Range(Pitch.parse(low), Pitch.parse(high))


def _names(pitches: list[Pitch]) -> list[str]:
    return [f"{p.pitch_class.ascii_name}{p.octave.number}" for p in pitches]


def test_c_major_pentatonic_over_four_octaves() -> None:
    pitches = scale_pitches(_range("C3", "B6"), Scale(PitchClass.parse("C"), MAJOR_PENTATONIC))
    assert len(pitches) == 20
    assert _names(pitches[:6]) == ["C3", "D3", "E3", "G3", "A3", "C4"]
    assert _names(pitches[-1:]) == ["A6"]


def test_range_starting_mid_scale_skips_lower_degrees() -> None:
    pitches = scale_pitches(_range("E3", "C4"), Scale(PitchClass.parse("C"), MAJOR))
    assert _names(pitches) == ["E3", "F3", "G3", "A3", "B3", "C4"]


def test_flat_root_spells_with_flats() -> None:
    pitches = scale_pitches(_range("Bb2", "Bb3"), Scale(PitchClass.parse("Bb"), MAJOR))
    assert _names(pitches) == ["Bb2", "C3", "D3", "Eb3", "F3", "G3", "A3", "Bb3"]


def test_sharp_root_spells_with_sharps() -> None:
    pitches = scale_pitches(_range("D4", "D5"), Scale(PitchClass.parse("D"), MAJOR))
    assert _names(pitches) == ["D4", "E4", "F#4", "G4", "A4", "B4", "C#5", "D5"]


def test_root_above_low_bound_walks_in_from_below() -> None:
    pitches = scale_pitches(_range("C0", "E0"), Scale(PitchClass.parse("D"), MAJOR))
    assert _names(pitches) == ["C#0", "D0", "E0"]


def test_reversed_range_is_empty() -> None:
    assert scale_pitches(_range("C5", "C4"), Scale(PitchClass.parse("C"), MAJOR)) == []


def test_malformed_definition_is_empty() -> None:
    scale = Scale(PitchClass.parse("C"), ScaleDef("Broken", (2, 0, 3)))
    assert scale_pitches(_range("C3", "C5"), scale) == []
    assert scale_pitches(_range("C3", "C5"), Scale(PitchClass.parse("C"), ScaleDef("Empty", ()))) == []


@pytest.mark.parametrize("name", sorted(SCALES))
@pytest.mark.parametrize("root", ["C", "F#", "Ab", "B"])
def test_scale_pitches_are_bounded_and_strictly_ascending(name: str, root: str) -> None:
    range_ = _range("G2", "E5")
    pitches = scale_pitches(range_, Scale(PitchClass.parse(root), SCALES[name]))
    offsets = [p.semitone_offset for p in pitches]
    assert pitches
    assert all(range_.contains(p) for p in pitches)
    assert offsets == sorted(set(offsets))


def test_range_setters_return_copies() -> None:
    original = _range("C3", "B6")
    lowered = original.set_lowest(Pitch.parse("A2"))
    raised = original.set_highest(Pitch.parse("C7"))
    assert original.lowest == Pitch.parse("C3")
    assert lowered.lowest == Pitch.parse("A2")
    assert raised.highest == Pitch.parse("C7")
    assert not original.set_lowest(Pitch.parse("C7")).is_valid


def test_f_major_spells_its_fourth_as_b_flat() -> None:
    pitches = scale_pitches(_range("F4", "F5"), Scale(PitchClass.parse("F"), MAJOR))
    assert _names(pitches) == ["F4", "G4", "A4", "Bb4", "C5", "D5", "E5", "F5"]
