"""Formula: a melodic pattern expressed as scale-degree steps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Aggregate direction of a formula."""

    ASCENDING = "ascending"
    DESCENDING = "descending"
    STATIC = "static"


@dataclass(frozen=True)
class Formula:
    """
    Signed scale-degree deltas applied one after another.

    A step of ``+1`` moves to the next scale degree up, ``-2`` skips down two
    degrees. Steps are degrees of the generated scale, not semitones.

    Attributes:
        steps: The deltas, in playing order.
    """

    steps: tuple[int, ...]

    @classmethod
    def of(cls, *steps: int) -> Formula:
        """Build a formula from positional steps: ``Formula.of(-2, -1, 2, -1)``."""
        return cls(tuple(steps))

    @property
    def direction(self) -> Direction:
        """Ascending when the steps sum above zero, descending below, else static."""
        total = sum(self.steps)
        if total > 0:
            return Direction.ASCENDING
        if total < 0:
            return Direction.DESCENDING
        return Direction.STATIC

    def invert(self) -> Formula:
        """Negate every step, keeping their order."""
        return Formula(tuple(-step for step in self.steps))

    def __len__(self) -> int:
        return len(self.steps)


def direction(formula: Formula) -> Direction:
    """Net direction of a formula: ascending, descending or static."""
    return formula.direction


def invert(formula: Formula) -> Formula:
    """Return the formula with every step reversed."""
    return formula.invert()
