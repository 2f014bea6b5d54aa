"""Data models for sheet music rendering outputs."""

from dataclasses import dataclass


@dataclass(frozen=True)
class VexflowNote:
    """A single VexFlow note or rest token."""

    keys: list[str]
    duration: str
    accidentals: list[str | None]


@dataclass(frozen=True)
class VexflowMeasure:
    """The notes and rests of one single-staff measure."""

    notes: list[VexflowNote]


@dataclass(frozen=True)
class ScoreDocument:
    """
    Neutral score representation consumed by the VexFlow renderer.

    ``tuplet_size`` is 3 when every note is a triplet, so consecutive notes
    are bracketed in threes; None for straight rhythms.
    """

    title: str
    time_signature: str
    beats: int
    beat_value: int
    tuplet_size: int | None
    measures: list[VexflowMeasure]
