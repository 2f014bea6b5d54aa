"""Line construction: walking a formula over the scale pitches in a range."""

from __future__ import annotations

import logging

from scalepractice.formula import Formula
from scalepractice.pitch import Pitch, PitchClass
from scalepractice.scale import Range, Scale, ScaleDef, scale_pitches

logger = logging.getLogger(__name__)


def starting_index(pitches: list[Pitch], starting_note: PitchClass) -> int | None:
    """
    Index of the first pitch sounding the same pitch class as ``starting_note``.

    Matching is enharmonic, so a starting note of D♭ finds a C♯ in the scale.
    """
    for index, pitch in enumerate(pitches):
        if pitch.pitch_class.offset == starting_note.offset:
            return index
    return None


def apply_formula(pitches: list[Pitch], formula: Formula, start: int) -> list[Pitch]:
    """
    Walk ``formula`` over ``pitches`` from index ``start``.

    Each step moves the index by its value; the pitch at every visited
    index is emitted, so a formula of n steps yields n + 1 pitches. The walk
    stops at the first index outside the sequence and the remaining steps
    are dropped.
    """
    if not 0 <= start < len(pitches):
        return []
    line = [pitches[start]]
    index = start
    for position, step in enumerate(formula.steps):
        index += step
        if not 0 <= index < len(pitches):
            logger.debug(
                "Formula walk left the range at step %d; dropping %d step(s)",
                position,
                len(formula.steps) - position,
            )
            break
        line.append(pitches[index])
    return line


def generate_line(
    range_: Range,
    scale_def: ScaleDef,
    formula: Formula,
    root: PitchClass,
    starting_note: PitchClass,
) -> list[Pitch]:
    """
    Build the melodic line for one practice selection.

    Args:
        range_:        Inclusive pitch bounds.
        scale_def:     Semitone step pattern of the scale.
        formula:       Scale-degree steps to walk.
        root:          Root of the scale.
        starting_note: Pitch class the walk begins on; its lowest occurrence
                       in the range is used.

    Returns:
        The line in playing order. Empty when the range holds no scale
        pitches or the starting note is not in the scale.
    """
    pitches = scale_pitches(range_, Scale(root, scale_def))
    start = starting_index(pitches, starting_note)
    if start is None:
        logger.debug("Starting note %s not found in scale", starting_note.name)
        return []
    return apply_formula(pitches, formula, start)
