"""Scales and pitch ranges: generating the scale pitches inside a range."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from scalepractice.pitch import (
    SEMITONES_PER_OCTAVE,
    Accidental,
    Chooser,
    Letter,
    Pitch,
    PitchClass,
    choice,
    display_pitch,
    enharmonic_equivalents,
)

logger = logging.getLogger(__name__)

#: Spelling preference for F and for roots written with a flat.
FLAT_PREFERENCE: tuple[Chooser, ...] = (Chooser.NATURAL, Chooser.FLAT, Chooser.ANY)

#: Spelling preference for every other root.
SHARP_PREFERENCE: tuple[Chooser, ...] = (Chooser.NATURAL, Chooser.SHARP, Chooser.ANY)


@dataclass(frozen=True)
class Range:
    """
    Inclusive pitch bounds for scale generation.

    ``lowest`` should not sound above ``highest``. Nothing swaps them back:
    a reversed range simply yields no scale pitches.
    """

    lowest: Pitch
    highest: Pitch

    @property
    def is_valid(self) -> bool:
        return self.lowest.semitone_offset <= self.highest.semitone_offset

    def contains(self, pitch: Pitch) -> bool:
        """True when ``pitch`` sounds within the bounds."""
        return (
            self.lowest.semitone_offset
            <= pitch.semitone_offset
            <= self.highest.semitone_offset
        )

    def set_lowest(self, pitch: Pitch) -> Range:
        """Return a copy with a new lower bound."""
        return replace(self, lowest=pitch)

    def set_highest(self, pitch: Pitch) -> Range:
        """Return a copy with a new upper bound."""
        return replace(self, highest=pitch)


@dataclass(frozen=True)
class ScaleDef:
    """
    One octave of a scale as semitone steps, e.g. ``(2, 2, 3, 2, 3)``.

    Attributes:
        name:  Human-readable name, e.g. "Major pentatonic".
        steps: Semitone intervals between consecutive degrees. A full octave
               pattern sums to 12.
    """

    name: str
    steps: tuple[int, ...]

    @property
    def is_well_formed(self) -> bool:
        return bool(self.steps) and all(step > 0 for step in self.steps)


@dataclass(frozen=True)
class Scale:
    """A scale definition anchored on a root pitch class."""

    root: PitchClass
    definition: ScaleDef

    @property
    def spelling(self) -> tuple[Chooser, ...]:
        """Chooser order used to spell this scale's pitches."""
        return spelling_preference(self.root)


def spelling_preference(root: PitchClass) -> tuple[Chooser, ...]:
    """Flat roots and F spell with flats; all other roots spell with sharps."""
    if root.accidental is Accidental.FLAT or root == PitchClass(Letter.F):
        return FLAT_PREFERENCE
    return SHARP_PREFERENCE


def scale_pitches(range_: Range, scale: Scale) -> list[Pitch]:
    """
    Return the pitches of ``scale`` inside ``range_``, lowest first.

    The walk starts at the root's occurrence at or below the low bound and
    follows the step pattern cyclically until it passes the high bound.
    Pitches under the low bound are skipped. A reversed range or a
    malformed scale definition yields an empty list.

    Args:
        range_: Inclusive bounds.
        scale:  Root and step pattern.

    Returns:
        Strictly ascending pitches, spelled per :func:`spelling_preference`.
    """
    if not scale.definition.is_well_formed:
        logger.warning("Ignoring malformed scale definition %r", scale.definition)
        return []
    if not range_.is_valid:
        logger.debug(
            "Empty range %s-%s",
            display_pitch(range_.lowest),
            display_pitch(range_.highest),
        )
        return []

    low = range_.lowest.semitone_offset
    high = range_.highest.semitone_offset

    position = scale.root.offset + range_.lowest.octave.number * SEMITONES_PER_OCTAVE
    while position > low:
        position -= SEMITONES_PER_OCTAVE

    steps = scale.definition.steps
    preference = scale.spelling
    pitches: list[Pitch] = []
    degree = 0
    while position <= high:
        if position >= low:
            pitch = choice(preference, enharmonic_equivalents(position))
            if pitch is not None:
                pitches.append(pitch)
        position += steps[degree % len(steps)]
        degree += 1
    return pitches
