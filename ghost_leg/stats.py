"""How evenly generated ladders spread starting columns over terminal columns."""

from __future__ import annotations

import random
from dataclasses import dataclass

from ghost_leg.ladder import MAX_RUNGS, MIN_RUNGS, generate_ladder, resolve_all


@dataclass
class FairnessReport:
    """Counts of start → terminal outcomes over many generated ladders."""

    column_count: int
    trials: int
    counts: list[list[int]]  # counts[start][terminal]

    def probabilities(self) -> list[list[float]]:
        return [[c / self.trials for c in row] for row in self.counts]

    def max_bias(self) -> float:
        """Largest distance of any cell from the uniform 1/N."""
        uniform = 1.0 / self.column_count
        return max(
            abs(p - uniform) for row in self.probabilities() for p in row
        )


def simulate_fairness(
    column_count: int,
    trials: int = 1000,
    rng: random.Random | None = None,
    min_rungs: int = MIN_RUNGS,
    max_rungs: int = MAX_RUNGS,
) -> FairnessReport:
    """Generate *trials* ladders and tally where each start column ends up.

    Prize shuffling is ignored here; this measures the rung layout alone.
    """
    assert trials > 0
    rng = rng or random.Random()
    counts = [[0] * column_count for _ in range(column_count)]
    placeholders = list(range(column_count))

    for _ in range(trials):
        ladder = generate_ladder(
            column_count, placeholders, rng=rng,
            min_rungs=min_rungs, max_rungs=max_rungs,
        )
        for start, terminal in resolve_all(ladder).items():
            counts[start][terminal] += 1

    return FairnessReport(column_count=column_count, trials=trials, counts=counts)
