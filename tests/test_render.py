"""Tests for the plain-text ladder renderer."""

from ghost_leg.ladder import Ladder, Rung, resolve_path
from ghost_leg.prizes import Prize
from ghost_leg.render import _display_width, _fit, render_ladder


def _ladder() -> Ladder:
    return Ladder(
        column_count=3,
        rungs=(Rung(y=200, left=1), Rung(y=150, left=0)),
        prizes=(Prize("a", "Alpha"), Prize("b", "Beta"), Prize("c", "Gamma")),
    )


def test_header_has_player_names():
    out = render_ladder(_ladder(), ["Ann", "Bob", "Cy"])
    header = out.splitlines()[0]
    assert "Ann" in header and "Bob" in header and "Cy" in header


def test_prizes_hidden_until_revealed():
    out = render_ladder(_ladder(), ["Ann", "Bob", "Cy"])
    footer = out.splitlines()[-1]
    assert footer.count("?") == 3
    assert "Alpha" not in out


def test_revealed_prize_shown():
    out = render_ladder(_ladder(), ["Ann", "Bob", "Cy"], revealed=[1])
    footer = out.splitlines()[-1]
    assert "Beta" in footer
    assert footer.count("?") == 2


def test_one_row_per_rung_plus_spacers():
    lines = render_ladder(_ladder()).splitlines()
    # header + (spacer + rung) per rung + trailing spacer + footer
    assert len(lines) == 1 + 2 * 2 + 1 + 1


def test_rungs_drawn_top_to_bottom():
    lines = render_ladder(_ladder()).splitlines()
    first_rung, second_rung = lines[2], lines[4]
    # y=150 connects columns 0–1, so its dashes start left of the y=200 rung's
    assert first_rung.index("-") < second_rung.index("-")


def test_highlighted_path_uses_double_line():
    ladder = _ladder()
    lines = render_ladder(ladder, highlight=resolve_path(ladder, 0)).splitlines()
    # Column 0 crosses both rungs
    assert "=" in lines[2] and "-" not in lines[2]
    assert "=" in lines[4] and "-" not in lines[4]


def test_path_avoiding_a_rung_leaves_it_plain():
    ladder = Ladder(
        column_count=4,
        rungs=(Rung(y=150, left=0), Rung(y=200, left=2)),
        prizes=("w", "x", "y", "z"),
    )
    out = render_ladder(ladder, highlight=resolve_path(ladder, 0))
    lines = out.splitlines()
    assert "=" in lines[2]
    assert "=" not in lines[4] and "-" in lines[4]


# ── Wide characters ──────────────────────────────────────────────────

def test_hangul_counts_double_width():
    assert _display_width("Ann") == 3
    assert _display_width("플레이어 1") == 10


def test_fit_pads_wide_text_to_cell():
    assert _display_width(_fit("플레이어 1", 12)) == 12
    assert _fit("플레이어 1", 12).strip() == "플레이어 1"


def test_fit_truncates_wide_text_within_cell():
    fitted = _fit("아주아주긴식당이름입니다", 8)
    assert fitted.rstrip().endswith("…")
    assert _display_width(fitted) == 8


def test_korean_names_line_up_with_columns():
    ladder = Ladder(column_count=2, rungs=(Rung(y=150, left=0),), prizes=("a", "b"))
    lines = render_ladder(ladder, ["플레이어 1", "플레이어 2"]).splitlines()
    header, rail = lines[0], lines[1]
    # cell = 10 + 2, rails at the middle of each cell
    assert _display_width(header) == 24
    assert [i for i, ch in enumerate(rail) if ch == "|"] == [6, 18]
