"""Ladder structure, generation, and path resolution for a ghost-leg game."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Sequence

# Geometry and rung count range of a freshly generated ladder
LADDER_TOP = 100.0
LADDER_HEIGHT = 400.0
LADDER_BOTTOM = LADDER_TOP + LADDER_HEIGHT
MIN_RUNGS = 8
MAX_RUNGS = 15


@dataclass(frozen=True)
class Rung:
    """A horizontal connector between columns ``left`` and ``left + 1``."""

    y: float
    left: int

    @property
    def right(self) -> int:
        return self.left + 1

    def touches(self, column: int) -> bool:
        return column == self.left or column == self.right

    def other_side(self, column: int) -> int:
        return self.right if column == self.left else self.left


@dataclass(frozen=True)
class Ladder:
    """One game's ladder: vertical columns, rungs, and the prize row.

    ``prizes[i]`` is what a path ending on column ``i`` wins.
    """

    column_count: int
    rungs: tuple[Rung, ...]
    prizes: tuple[Any, ...] = ()
    top: float = LADDER_TOP
    bottom: float = LADDER_BOTTOM

    def sorted_rungs(self) -> list[Rung]:
        """Rungs in traversal order (top to bottom)."""
        return sorted(self.rungs, key=lambda r: r.y)

    def prize_for(self, terminal_column: int) -> Any:
        return self.prizes[terminal_column]


@dataclass(frozen=True)
class TraversalResult:
    """The rungs crossed walking down from ``start_column``, in order."""

    start_column: int
    rungs: tuple[Rung, ...]
    terminal_column: int


@dataclass(frozen=True)
class RevealStep:
    """One waypoint of an animated reveal.

    ``kind`` is "start", "descend" (straight down along ``column``) or
    "cross" (sideways along a rung onto ``column``).
    """

    kind: str
    column: int
    y: float
    rung: Rung | None = field(default=None)


def generate_ladder(
    column_count: int,
    prizes: Sequence[Any],
    rng: random.Random | None = None,
    min_rungs: int = MIN_RUNGS,
    max_rungs: int = MAX_RUNGS,
    top: float = LADDER_TOP,
    height: float = LADDER_HEIGHT,
) -> Ladder:
    """Build a random ladder for *column_count* players.

    Preconditions: ``column_count >= 2`` and ``len(prizes) == column_count``.
    One rung sits on each of ``rung_count`` evenly spaced slots strictly
    between *top* and ``top + height``; its left column is uniform over
    ``[0, column_count - 2]``. The prize row is a shuffled copy of *prizes*.
    """
    assert column_count >= 2, "a ladder needs at least two columns"
    assert len(prizes) == column_count, "need exactly one prize per column"
    assert 1 <= min_rungs <= max_rungs

    rng = rng or random.Random()
    rung_count = rng.randint(min_rungs, max_rungs)

    rungs = []
    for i in range(1, rung_count + 1):
        y = top + height * i / (rung_count + 1)
        rungs.append(Rung(y=y, left=rng.randrange(column_count - 1)))

    shuffled = list(prizes)
    rng.shuffle(shuffled)

    return Ladder(
        column_count=column_count,
        rungs=tuple(rungs),
        prizes=tuple(shuffled),
        top=top,
        bottom=top + height,
    )


def resolve_path(ladder: Ladder, start_column: int) -> TraversalResult:
    """Follow the path down from *start_column*, crossing every rung met.

    Pure. Rungs are sorted here, so their storage order never matters.
    """
    assert 0 <= start_column < ladder.column_count

    current = start_column
    crossed: list[Rung] = []
    for rung in ladder.sorted_rungs():
        if rung.touches(current):
            crossed.append(rung)
            current = rung.other_side(current)

    return TraversalResult(
        start_column=start_column,
        rungs=tuple(crossed),
        terminal_column=current,
    )


def resolve_all(ladder: Ladder) -> dict[int, int]:
    """Map every start column to its terminal column (a permutation)."""
    return {
        col: resolve_path(ladder, col).terminal_column
        for col in range(ladder.column_count)
    }


def flip_ladder(ladder: Ladder) -> Ladder:
    """Mirror *ladder* top-to-bottom.

    Walking down the flipped ladder is walking up the original, so
    ``resolve_path(flip_ladder(l), b)`` ends on ``a`` whenever
    ``resolve_path(l, a)`` ends on ``b``.
    """
    mirrored = tuple(
        Rung(y=ladder.top + ladder.bottom - r.y, left=r.left)
        for r in ladder.rungs
    )
    return Ladder(
        column_count=ladder.column_count,
        rungs=mirrored,
        prizes=ladder.prizes,
        top=ladder.top,
        bottom=ladder.bottom,
    )


def reveal_steps(ladder: Ladder, start_column: int) -> list[RevealStep]:
    """Waypoints for replaying a path: down to each rung, across, then down to the bottom."""
    traversal = resolve_path(ladder, start_column)
    steps = [RevealStep(kind="start", column=start_column, y=ladder.top)]

    current = start_column
    for rung in traversal.rungs:
        steps.append(RevealStep(kind="descend", column=current, y=rung.y))
        current = rung.other_side(current)
        steps.append(RevealStep(kind="cross", column=current, y=rung.y, rung=rung))

    steps.append(RevealStep(kind="descend", column=current, y=ladder.bottom))
    return steps
