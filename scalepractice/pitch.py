"""Pitch primitives: pitch classes, octaves, pitches and enharmonic spelling."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

SEMITONES_PER_OCTAVE = 12
MIN_OCTAVE = 0
MAX_OCTAVE = 8


class Letter(Enum):
    """Note letters, valued by their natural semitone offset above C."""

    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11


class Accidental(Enum):
    """Accidentals, valued by the semitone shift they apply."""

    FLAT = -1
    NATURAL = 0
    SHARP = 1

    @property
    def symbol(self) -> str:
        """Typographic symbol used for display, e.g. ``♯``."""
        return _SYMBOLS[self]

    @property
    def ascii(self) -> str:
        """ASCII form used in scientific pitch notation, e.g. ``#``."""
        return _ASCII[self]


_SYMBOLS: dict[Accidental, str] = {
    Accidental.FLAT: "♭",
    Accidental.NATURAL: "",
    Accidental.SHARP: "♯",
}

_ASCII: dict[Accidental, str] = {
    Accidental.FLAT: "b",
    Accidental.NATURAL: "",
    Accidental.SHARP: "#",
}


@dataclass(frozen=True)
class PitchClass:
    """
    One spelling of a chromatic pitch class, e.g. C♯ or D♭.

    Several spellings share a semitone offset; that is enharmonic equivalence.
    """

    letter: Letter
    accidental: Accidental = Accidental.NATURAL

    @property
    def offset(self) -> int:
        """Semitone offset within the octave (0-11)."""
        return (self.letter.value + self.accidental.value) % SEMITONES_PER_OCTAVE

    @property
    def name(self) -> str:
        """Display name such as ``B♭``."""
        return f"{self.letter.name}{self.accidental.symbol}"

    @property
    def ascii_name(self) -> str:
        """ASCII name such as ``Bb``."""
        return f"{self.letter.name}{self.accidental.ascii}"

    @classmethod
    def parse(cls, text: str) -> PitchClass:
        """
        Parse a pitch class name like ``C``, ``F#``, ``Bb`` or ``E♭``.

        Raises:
            ValueError: If the text does not name a modelled pitch class.
        """
        match = re.fullmatch(r"([A-Ga-g])([#b♯♭]?)", text.strip())
        if not match:
            raise ValueError(f"Invalid pitch class: {text!r}")
        letter = Letter[match.group(1).upper()]
        accidental = _parse_accidental(match.group(2))
        pitch_class = cls(letter, accidental)
        if pitch_class not in PITCH_CLASSES:
            raise ValueError(f"Unsupported spelling: {text!r}")
        return pitch_class


def _parse_accidental(text: str) -> Accidental:
    if text in ("#", "♯"):
        return Accidental.SHARP
    if text in ("b", "♭"):
        return Accidental.FLAT
    return Accidental.NATURAL


def _build_pitch_classes() -> tuple[PitchClass, ...]:
    """
    Every modelled spelling, in chromatic order.

    Naturals plus the sharp and flat of each black key. Spellings that cross
    a letter's octave boundary (B♯, C♭, E♯, F♭) are left out so that the
    octave number of a pitch always matches its sounding octave.
    """
    classes: list[PitchClass] = []
    for letter in Letter:
        classes.append(PitchClass(letter, Accidental.NATURAL))
    for letter in Letter:
        if letter not in (Letter.E, Letter.B):
            classes.append(PitchClass(letter, Accidental.SHARP))
        if letter not in (Letter.C, Letter.F):
            classes.append(PitchClass(letter, Accidental.FLAT))
    return tuple(sorted(classes, key=lambda pc: (pc.offset, pc.accidental.value)))


PITCH_CLASSES: tuple[PitchClass, ...] = _build_pitch_classes()


@dataclass(frozen=True, order=True)
class Octave:
    """An octave index in scientific pitch notation (0-8)."""

    number: int

    def __post_init__(self) -> None:
        if not MIN_OCTAVE <= self.number <= MAX_OCTAVE:
            raise ValueError(
                f"Octave {self.number} out of range {MIN_OCTAVE}-{MAX_OCTAVE}"
            )

    @classmethod
    def from_number(cls, number: int) -> Octave | None:
        """Return the octave for ``number``, or None when out of bounds."""
        if MIN_OCTAVE <= number <= MAX_OCTAVE:
            return cls(number)
        return None


OCTAVES: tuple[Octave, ...] = tuple(
    Octave(n) for n in range(MIN_OCTAVE, MAX_OCTAVE + 1)
)


@dataclass(frozen=True)
class Pitch:
    """
    A spelled pitch class placed in an octave.

    Equality compares spelling; compare ``semitone_offset`` values to test
    whether two pitches sound the same.
    """

    pitch_class: PitchClass
    octave: Octave

    @property
    def semitone_offset(self) -> int:
        """Absolute semitone offset, C0 = 0."""
        return self.pitch_class.offset + self.octave.number * SEMITONES_PER_OCTAVE

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """
        Parse a note like ``C4``, ``F#3`` or ``Bb5``.

        Raises:
            ValueError: If the text is malformed or the octave is out of range.
        """
        match = re.fullmatch(r"(.+?)(-?\d+)", text.strip())
        if not match:
            raise ValueError(f"Invalid note: {text!r}")
        return cls(PitchClass.parse(match.group(1)), Octave(int(match.group(2))))

    def __str__(self) -> str:
        return display_pitch(self)


# ── Enharmonic resolution ───────────────────────────────────────────────────


class Chooser(Enum):
    """
    Spelling selectors tried in order by :func:`choice`.

    Each selector picks the first candidate with the matching accidental;
    ``ANY`` accepts the first candidate whatever its spelling.
    """

    NATURAL = "natural"
    SHARP = "sharp"
    FLAT = "flat"
    ANY = "any"

    def select(self, pitches: list[Pitch]) -> Pitch | None:
        """Return the first pitch this selector accepts, if any."""
        for pitch in pitches:
            if self is Chooser.ANY or pitch.pitch_class.accidental is _ACCEPTS[self]:
                return pitch
        return None


_ACCEPTS: dict[Chooser, Accidental] = {
    Chooser.NATURAL: Accidental.NATURAL,
    Chooser.SHARP: Accidental.SHARP,
    Chooser.FLAT: Accidental.FLAT,
}

#: Preference for UI defaults: naturals first, then sharps, then flats.
DEFAULT_PREFERENCE: tuple[Chooser, ...] = (Chooser.NATURAL, Chooser.SHARP, Chooser.FLAT)


def semitone_offset(pitch: Pitch) -> int:
    """Return the absolute semitone offset of ``pitch`` (C0 = 0)."""
    return pitch.semitone_offset


def enharmonic_equivalents(absolute_semitone: int) -> list[Pitch]:
    """
    Return every modelled pitch whose absolute offset equals the input.

    The remainder modulo 12 selects the spellings and the quotient selects
    the octave. Offsets outside octaves 0-8 have no equivalents.
    """
    octave_number, remainder = divmod(absolute_semitone, SEMITONES_PER_OCTAVE)
    octave = Octave.from_number(octave_number)
    if octave is None:
        return []
    return [Pitch(pc, octave) for pc in PITCH_CLASSES if pc.offset == remainder]


def choice(preferences: list[Chooser] | tuple[Chooser, ...], pitches: list[Pitch]) -> Pitch | None:
    """Apply ``preferences`` left to right; the first selector to match wins."""
    for chooser in preferences:
        chosen = chooser.select(pitches)
        if chosen is not None:
            return chosen
    return None


def transpose(
    preferences: list[Chooser] | tuple[Chooser, ...],
    pitch: Pitch,
    semitone_delta: int,
) -> Pitch | None:
    """
    Move ``pitch`` by ``semitone_delta`` and spell the result.

    Returns:
        The respelled pitch, or None if the target leaves octaves 0-8 or no
        selector in ``preferences`` accepts any of its spellings.
    """
    target = pitch.semitone_offset + semitone_delta
    result = choice(preferences, enharmonic_equivalents(target))
    if result is None:
        logger.debug("No spelling for %s %+d semitones", display_pitch(pitch), semitone_delta)
    return result


# ── Textual forms ───────────────────────────────────────────────────────────


def display_pitch(pitch: Pitch) -> str:
    """Display form such as ``C♯4``."""
    return f"{pitch.pitch_class.name}{pitch.octave.number}"


def to_scientific_pitch_notation(pitch: Pitch) -> str | None:
    """
    Scientific pitch notation key such as ``C#4``, ``Bb3`` or ``C4``.

    This is the key format used for sample lookup and notation input.
    Returns None for a pitch whose spelling is not modelled.
    """
    if pitch.pitch_class not in PITCH_CLASSES:
        return None
    return f"{pitch.pitch_class.ascii_name}{pitch.octave.number}"


def midi_number(pitch: Pitch) -> int:
    """
    MIDI note number of ``pitch``.

    MIDI octave numbering: C-1 = 0, C0 = 12, ... C4 (Middle C) = 60.
    """
    return pitch.semitone_offset + SEMITONES_PER_OCTAVE
