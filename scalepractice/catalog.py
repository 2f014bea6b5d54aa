"""Selectable practice material: scales, formulas, meters and durations.

These are plain values. Callers pick from them and pass the picks to the
engine; nothing here tracks a current selection.
"""

from scalepractice.formula import Formula
from scalepractice.orchestration import Duration, Feel, NoteDuration, TimeSignature
from scalepractice.pitch import PITCH_CLASSES, Letter, Octave, Pitch, PitchClass
from scalepractice.scale import Range, ScaleDef

# ── Scales ──────────────────────────────────────────────────────────────────

MAJOR = ScaleDef("Major", (2, 2, 1, 2, 2, 2, 1))
NATURAL_MINOR = ScaleDef("Natural minor", (2, 1, 2, 2, 1, 2, 2))
HARMONIC_MINOR = ScaleDef("Harmonic minor", (2, 1, 2, 2, 1, 3, 1))
MELODIC_MINOR = ScaleDef("Melodic minor", (2, 1, 2, 2, 2, 2, 1))
DORIAN = ScaleDef("Dorian", (2, 1, 2, 2, 2, 1, 2))
MIXOLYDIAN = ScaleDef("Mixolydian", (2, 2, 1, 2, 2, 1, 2))
MAJOR_PENTATONIC = ScaleDef("Major pentatonic", (2, 2, 3, 2, 3))
MINOR_PENTATONIC = ScaleDef("Minor pentatonic", (3, 2, 2, 3, 2))
BLUES = ScaleDef("Blues", (3, 2, 1, 1, 3, 2))
WHOLE_TONE = ScaleDef("Whole tone", (2, 2, 2, 2, 2, 2))
CHROMATIC = ScaleDef("Chromatic", (1,) * 12)

SCALES: dict[str, ScaleDef] = {
    "major": MAJOR,
    "natural-minor": NATURAL_MINOR,
    "harmonic-minor": HARMONIC_MINOR,
    "melodic-minor": MELODIC_MINOR,
    "dorian": DORIAN,
    "mixolydian": MIXOLYDIAN,
    "major-pentatonic": MAJOR_PENTATONIC,
    "minor-pentatonic": MINOR_PENTATONIC,
    "blues": BLUES,
    "whole-tone": WHOLE_TONE,
    "chromatic": CHROMATIC,
}

# ── Formulas ────────────────────────────────────────────────────────────────

#: Up a step at a time, one octave of a seven-note scale.
STEPS_UP = Formula.of(1, 1, 1, 1, 1, 1, 1)
#: Broken thirds climbing: 1-3, 2-4, 3-5, ...
THIRDS_UP = Formula.of(2, -1, 2, -1, 2, -1, 2, -1, 2, -1, 2)
#: Groups of four: 1-2-3-4, 2-3-4-5, ...
FOURS_UP = Formula.of(1, 1, 1, -2, 1, 1, 1, -2, 1, 1, 1, -2, 1, 1, 1)
#: Falling turn figure.
TURN_DOWN = Formula.of(-2, -1, 2, -1)

FORMULAS: dict[str, Formula] = {
    "steps-up": STEPS_UP,
    "steps-down": STEPS_UP.invert(),
    "thirds-up": THIRDS_UP,
    "thirds-down": THIRDS_UP.invert(),
    "fours-up": FOURS_UP,
    "fours-down": FOURS_UP.invert(),
    "turn-down": TURN_DOWN,
    "turn-up": TURN_DOWN.invert(),
}

# ── Roots ───────────────────────────────────────────────────────────────────

ROOTS: dict[str, PitchClass] = {pc.ascii_name: pc for pc in PITCH_CLASSES}

# ── Meters and durations ────────────────────────────────────────────────────

TIME_SIGNATURES: dict[str, TimeSignature] = {
    str(ts): ts
    for ts in (
        TimeSignature(2, Duration.QUARTER),
        TimeSignature(3, Duration.QUARTER),
        TimeSignature(4, Duration.QUARTER),
        TimeSignature(6, Duration.EIGHTH),
        TimeSignature(12, Duration.EIGHTH),
        TimeSignature(12, Duration.QUARTER),
    )
}

DURATIONS: dict[str, Duration] = {d.name.lower(): d for d in Duration}

# ── Defaults ────────────────────────────────────────────────────────────────

DEFAULT_RANGE = Range(
    lowest=Pitch(PitchClass(Letter.C), Octave(3)),
    highest=Pitch(PitchClass(Letter.B), Octave(6)),
)
DEFAULT_TIME_SIGNATURE = TIME_SIGNATURES["4/4"]
DEFAULT_NOTE_DURATION = NoteDuration(Duration.EIGHTH, Feel.NONE)
