"""Plain-text drawing of a ladder for the terminal."""

from __future__ import annotations

import unicodedata
from typing import Iterable, Sequence

from ghost_leg.ladder import Ladder, TraversalResult

MIN_CELL = 6
MAX_CELL = 16


def _label(prize) -> str:
    return getattr(prize, "name", str(prize))


def _display_width(text: str) -> int:
    """Terminal columns taken by *text*; Hangul and other wide glyphs count two."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def _fit(text: str, width: int) -> str:
    if _display_width(text) > width:
        kept = ""
        for ch in text:
            if _display_width(kept + ch) > width - 1:
                break
            kept += ch
        text = kept + "…"
    pad = width - _display_width(text)
    return " " * (pad // 2) + text + " " * (pad - pad // 2)


def render_ladder(
    ladder: Ladder,
    names: Sequence[str] | None = None,
    highlight: TraversalResult | None = None,
    revealed: Iterable[int] = (),
) -> str:
    """Draw *ladder* top to bottom.

    Rungs on *highlight*'s path are drawn with ``=``; prizes are shown only
    for the terminal columns in *revealed*, the rest as ``?``.
    """
    names = list(names or [str(i + 1) for i in range(ladder.column_count)])
    shown = set(revealed)
    labels = names + [_label(p) for p in ladder.prizes]
    cell = max(MIN_CELL, min(MAX_CELL, max(_display_width(s) for s in labels) + 2))
    width = cell * ladder.column_count
    on_path = set(highlight.rungs) if highlight is not None else set()

    def x(col: int) -> int:
        return col * cell + cell // 2

    def blank_row() -> list[str]:
        row = [" "] * width
        for col in range(ladder.column_count):
            row[x(col)] = "|"
        return row

    lines = ["".join(_fit(n, cell) for n in names)]
    for rung in ladder.sorted_rungs():
        lines.append("".join(blank_row()).rstrip())
        row = blank_row()
        fill = "=" if rung in on_path else "-"
        for i in range(x(rung.left) + 1, x(rung.right)):
            row[i] = fill
        lines.append("".join(row).rstrip())
    lines.append("".join(blank_row()).rstrip())

    footer = [
        _fit(_label(ladder.prizes[col]) if col in shown else "?", cell)
        for col in range(ladder.column_count)
    ]
    lines.append("".join(footer).rstrip())
    return "\n".join(lines)
