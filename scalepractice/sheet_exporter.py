"""SheetExporter: converts an orchestration to HTML or Markdown sheet outputs."""

from __future__ import annotations

from typing import Any, Final

from scalepractice.orchestration import Duration, Feel, Measure, NoteEvent, Orchestration
from scalepractice.pitch import Accidental, Letter, Pitch
from scalepractice.sheet_models import ScoreDocument, VexflowMeasure, VexflowNote
from scalepractice.sheet_renderers import (
    SheetRenderer,
    VerovioHtmlRenderer,
    VexflowMarkdownRenderer,
)

SUPPORTED_FORMATS: Final[set[str]] = {"html", "md-vexflow"}

#: Staff position used to draw rests.
REST_KEY: Final[str] = "b/4"


class SheetExporter:
    """
    Convert an orchestration into sheet output via a pluggable renderer.

    Supported formats:
    - ``html``: music21 -> MusicXML -> Verovio -> inline SVG in an HTML file.
    - ``md-vexflow``: markdown file with embedded VexFlow JavaScript renderer.
    """

    _DURATION_MAP: Final[dict[Duration, str]] = {
        Duration.WHOLE: "w",
        Duration.HALF: "h",
        Duration.QUARTER: "q",
        Duration.EIGHTH: "8",
        Duration.SIXTEENTH: "16",
    }

    _VEXFLOW_ACCIDENTALS: Final[dict[Accidental, str]] = {
        Accidental.FLAT: "b",
        Accidental.NATURAL: "n",
        Accidental.SHARP: "#",
    }

    _MUSIC21_ACCIDENTALS: Final[dict[Accidental, str]] = {
        Accidental.FLAT: "-",
        Accidental.NATURAL: "",
        Accidental.SHARP: "#",
    }

    def __init__(self, title: str = "", output_format: str = "html") -> None:
        self.title = title
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_renderer(self, output_format: str) -> SheetRenderer:
        if output_format == "html":
            return VerovioHtmlRenderer()
        return VexflowMarkdownRenderer()

    def _to_document(self, orchestration: Orchestration) -> ScoreDocument:
        time_signature = orchestration.time_signature
        triplet = orchestration.note_duration.feel is Feel.TRIPLET
        return ScoreDocument(
            title=self.title,
            time_signature=str(time_signature),
            beats=time_signature.beats,
            beat_value=time_signature.beat_duration.value,
            tuplet_size=3 if triplet else None,
            measures=[
                VexflowMeasure(notes=self._measure_to_notes(measure))
                for measure in orchestration.measures
            ],
        )

    def _measure_to_notes(self, measure: Measure) -> list[VexflowNote]:
        """
        Convert one measure, writing accidentals the way a copyist would.

        An accidental holds for its letter and octave until the barline, so
        it is only written when it changes what is in force; a natural after
        a sharp or flat gets an explicit natural sign.
        """
        in_force: dict[tuple[Letter, int], Accidental] = {}
        return [self._event_to_note(event, in_force) for event in measure.events]

    def _event_to_note(
        self, event: NoteEvent, in_force: dict[tuple[Letter, int], Accidental]
    ) -> VexflowNote:
        duration = self._DURATION_MAP[event.duration.duration]
        if event.pitch is None:
            return VexflowNote(keys=[REST_KEY], duration=f"{duration}r", accidentals=[None])

        slot = (event.pitch.pitch_class.letter, event.pitch.octave.number)
        accidental = event.pitch.pitch_class.accidental
        previous = in_force.get(slot, Accidental.NATURAL)
        in_force[slot] = accidental
        return VexflowNote(
            keys=[self._pitch_to_key(event.pitch)],
            duration=duration,
            accidentals=[None if accidental is previous else self._VEXFLOW_ACCIDENTALS[accidental]],
        )

    def _pitch_to_key(self, pitch: Pitch) -> str:
        """VexFlow key such as ``c#/4``."""
        name = pitch.pitch_class.ascii_name.lower()
        return f"{name}/{pitch.octave.number}"

    def _music21_name(self, pitch: Pitch) -> str:
        """music21 note name such as ``B-3`` (music21 writes flats as ``-``)."""
        accidental = self._MUSIC21_ACCIDENTALS[pitch.pitch_class.accidental]
        return f"{pitch.pitch_class.letter.name}{accidental}{pitch.octave.number}"

    def _to_music21_score(self, orchestration: Orchestration) -> Any:
        from music21 import metadata, meter, note, stream

        part = stream.Part()
        for number, measure in enumerate(orchestration.measures, start=1):
            bar = stream.Measure(number=number)
            if number == 1:
                bar.append(meter.TimeSignature(str(orchestration.time_signature)))
            for event in measure.events:
                quarter_length = event.duration.length * 4
                if event.pitch is None:
                    bar.append(note.Rest(quarterLength=quarter_length))
                else:
                    bar.append(note.Note(self._music21_name(event.pitch), quarterLength=quarter_length))
            part.append(bar)

        score = stream.Score()
        score.metadata = metadata.Metadata(title=self.title)
        score.insert(0, part)
        return score

    def _score_to_musicxml_bytes(self, score: Any) -> bytes:
        from music21.musicxml.m21ToXml import GeneralObjectExporter

        exporter = GeneralObjectExporter(score)
        return exporter.parse()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, orchestration: Orchestration) -> str:
        """
        Render an orchestration into the selected format's file content.

        Raises:
            ValueError: If rendering fails.
        """
        if self.output_format == "html":
            score = self._to_music21_score(orchestration)
            return self.renderer.render(
                title=self.title,
                musicxml_bytes=self._score_to_musicxml_bytes(score),
            )
        return self.renderer.render(
            title=self.title,
            score_document=self._to_document(orchestration),
        )

    def export(self, orchestration: Orchestration, output_path: str) -> None:
        """
        Render an orchestration and write it to disk.

        Raises:
            ValueError: If rendering fails.
            OSError: If the output file cannot be written.
        """
        content = self.render(orchestration)
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
