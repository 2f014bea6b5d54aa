"""Orchestration: placing a line into measures of a time signature."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from scalepractice.pitch import Pitch

logger = logging.getLogger(__name__)

#: Notes in one triplet group (played in the time of two straight notes).
TRIPLET_GROUP = 3


class Duration(Enum):
    """Note values, valued by their denominator (4 = quarter note)."""

    WHOLE = 1
    HALF = 2
    QUARTER = 4
    EIGHTH = 8
    SIXTEENTH = 16

    @property
    def fraction(self) -> Fraction:
        """Length as a fraction of a whole note."""
        return Fraction(1, self.value)


class Feel(Enum):
    """Subdivision feel applied to every note of an orchestration."""

    NONE = "none"
    TRIPLET = "triplet"


@dataclass(frozen=True)
class NoteDuration:
    """A base note value plus its feel, e.g. eighth-note triplets."""

    duration: Duration
    feel: Feel = Feel.NONE

    @property
    def length(self) -> Fraction:
        """Sounding length as a fraction of a whole note."""
        if self.feel is Feel.TRIPLET:
            return self.duration.fraction * Fraction(2, TRIPLET_GROUP)
        return self.duration.fraction


@dataclass(frozen=True)
class TimeSignature:
    """
    A meter such as 4/4 or 6/8.

    Attributes:
        beats:         Number of beats per measure.
        beat_duration: Note value of one beat.
    """

    beats: int
    beat_duration: Duration

    @property
    def measure_length(self) -> Fraction:
        """Length of one measure as a fraction of a whole note."""
        return self.beats * self.beat_duration.fraction

    @property
    def is_compound(self) -> bool:
        """True for 6, 9 or 12 beats, where the felt beat is three notated beats."""
        return self.beats > 3 and self.beats % 3 == 0

    def __str__(self) -> str:
        return f"{self.beats}/{self.beat_duration.value}"


@dataclass(frozen=True)
class NoteEvent:
    """A pitch, or a rest when ``pitch`` is None, lasting one note duration."""

    pitch: Pitch | None
    duration: NoteDuration

    @property
    def is_rest(self) -> bool:
        return self.pitch is None


@dataclass(frozen=True)
class Measure:
    """One measure's events in playing order."""

    events: tuple[NoteEvent, ...]

    @property
    def length(self) -> Fraction:
        return sum((event.duration.length for event in self.events), Fraction(0))


@dataclass(frozen=True)
class Orchestration:
    """A line placed into complete measures."""

    time_signature: TimeSignature
    note_duration: NoteDuration
    measures: tuple[Measure, ...]

    @property
    def events(self) -> list[NoteEvent]:
        """All events across measures, in playing order."""
        return [event for measure in self.measures for event in measure.events]


def notes_per_measure(time_signature: TimeSignature, note_duration: NoteDuration) -> int | None:
    """
    Number of ``note_duration`` slots that exactly fill one measure.

    A triplet feel additionally needs every triplet group to fit whole in
    the measure. Returns None when the measure cannot be filled exactly.
    """
    if time_signature.beats <= 0:
        return None
    slots = time_signature.measure_length / note_duration.length
    if slots.denominator != 1:
        return None
    count = int(slots)
    if note_duration.feel is Feel.TRIPLET and count % TRIPLET_GROUP:
        return None
    return count


def orchestrate(
    time_signature: TimeSignature,
    note_duration: NoteDuration,
    line: list[Pitch],
) -> Orchestration | None:
    """
    Split ``line`` into measures, padding the last one with rests.

    Args:
        time_signature: Meter of every measure.
        note_duration:  Value given to every note and rest.
        line:           Pitches in playing order.

    Returns:
        The orchestration, or None when the line is empty or the duration
        cannot fill the meter exactly (e.g. quarter-note triplets in 3/4).
    """
    if not line:
        logger.debug("Nothing to orchestrate: empty line")
        return None

    size = notes_per_measure(time_signature, note_duration)
    if size is None:
        logger.debug(
            "%s %s notes cannot fill a %s measure",
            note_duration.duration.name.lower(),
            note_duration.feel.value,
            time_signature,
        )
        return None

    measures: list[Measure] = []
    for start in range(0, len(line), size):
        chunk: list[Pitch | None] = list(line[start:start + size])
        chunk.extend([None] * (size - len(chunk)))
        measures.append(
            Measure(tuple(NoteEvent(pitch, note_duration) for pitch in chunk))
        )
    return Orchestration(time_signature, note_duration, tuple(measures))
