"""Unit tests for MidiExporter."""

from pathlib import Path
from typing import Any

import pytest
from midiutil import MIDIFile

from scalepractice.midi_exporter import TRACK_CONDUCTOR, TRACK_MELODY, MidiExporter, clocks_per_click
from scalepractice.orchestration import (
    Duration,
    Feel,
    NoteDuration,
    Orchestration,
    TimeSignature,
    orchestrate,
)
from scalepractice.pitch import Pitch


def _orchestration(note_duration: NoteDuration) -> Orchestration:
    line = [Pitch.parse(name) for name in ("C4", "E4", "G4")]
    orchestration = orchestrate(TimeSignature(4, Duration.QUARTER), note_duration, line)
    assert orchestration is not None
    return orchestration


@pytest.fixture
def recorded_notes(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    notes: list[dict[str, Any]] = []

    def fake_add_note(self: MIDIFile, **kwargs: Any) -> None:
        notes.append(kwargs)

    monkeypatch.setattr(MIDIFile, "addNote", fake_add_note)
    return notes


def test_notes_follow_event_timing(recorded_notes: list[dict[str, Any]]) -> None:
    MidiExporter()._build(_orchestration(NoteDuration(Duration.EIGHTH)))

    assert [n["pitch"] for n in recorded_notes] == [60, 64, 67]
    assert [n["time"] for n in recorded_notes] == [0.0, 0.5, 1.0]
    assert all(n["duration"] == 0.5 for n in recorded_notes)
    assert all(n["track"] == TRACK_MELODY for n in recorded_notes)


def test_triplet_timing(recorded_notes: list[dict[str, Any]]) -> None:
    MidiExporter(velocity=64)._build(_orchestration(NoteDuration(Duration.EIGHTH, Feel.TRIPLET)))

    assert [n["time"] for n in recorded_notes] == pytest.approx([0.0, 1 / 3, 2 / 3])
    assert all(n["volume"] == 64 for n in recorded_notes)


def test_export_writes_standard_midi_file(tmp_path: Path) -> None:
    out = tmp_path / "exercise.mid"
    MidiExporter(tempo=96).export(_orchestration(NoteDuration(Duration.QUARTER)), str(out))

    data = out.read_bytes()
    assert data.startswith(b"MThd")
    assert b"MTrk" in data


@pytest.mark.parametrize(
    "time_signature, expected",
    [
        (TimeSignature(4, Duration.QUARTER), 24),
        (TimeSignature(3, Duration.QUARTER), 24),
        (TimeSignature(2, Duration.QUARTER), 24),
        (TimeSignature(6, Duration.EIGHTH), 36),
        (TimeSignature(12, Duration.EIGHTH), 36),
        (TimeSignature(12, Duration.QUARTER), 72),
    ],
)
def test_clocks_per_click(time_signature: TimeSignature, expected: int) -> None:
    assert clocks_per_click(time_signature) == expected


def test_compound_meter_writes_dotted_quarter_click(monkeypatch: pytest.MonkeyPatch) -> None:
    signatures: list[tuple[Any, ...]] = []

    def fake_add_time_signature(self: MIDIFile, *args: Any) -> None:
        signatures.append(args)

    monkeypatch.setattr(MIDIFile, "addTimeSignature", fake_add_time_signature)
    line = [Pitch.parse(name) for name in ("C4", "D4", "E4")]
    orchestration = orchestrate(TimeSignature(6, Duration.EIGHTH), NoteDuration(Duration.EIGHTH), line)
    assert orchestration is not None

    MidiExporter()._build(orchestration)
    assert signatures == [(TRACK_CONDUCTOR, 0, 6, 3, 36)]
