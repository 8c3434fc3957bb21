"""CLI entry point: python -m ghost_leg {play,stats,chart}."""

from __future__ import annotations

import argparse
import random
import sys

from ghost_leg.chart import make_fairness_chart
from ghost_leg.export import write_round_json
from ghost_leg.ladder import MAX_RUNGS, MIN_RUNGS
from ghost_leg.prizes import SAMPLE_PRIZES, load_prizes
from ghost_leg.render import render_ladder
from ghost_leg.session import ALREADY_PLAYED, ActionResult, LadderSession
from ghost_leg.stats import simulate_fairness


def _make_rng(seed: int | None) -> random.Random:
    return random.Random(seed)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _check(result: ActionResult) -> ActionResult:
    """Stop the CLI on a rejected action."""
    if not result.ok:
        print(f"Error ({result.error}): {result.message}", file=sys.stderr)
        sys.exit(1)
    return result


def _check_rung_range(args: argparse.Namespace) -> None:
    if args.min_rungs < 1:
        _fail(f"--min-rungs must be at least 1, got {args.min_rungs}.")
    if args.max_rungs < args.min_rungs:
        _fail(f"--max-rungs ({args.max_rungs}) is below --min-rungs ({args.min_rungs}).")


def _check_simulation_args(args: argparse.Namespace) -> None:
    if args.columns < 2:
        _fail(f"--columns must be at least 2, got {args.columns}.")
    if args.trials < 1:
        _fail(f"--trials must be at least 1, got {args.trials}.")
    _check_rung_range(args)


# ── play ─────────────────────────────────────────────────────────────

def cmd_play(args: argparse.Namespace) -> None:
    """Play one full round and print each player's path."""
    _check_rung_range(args)
    prizes = load_prizes(args.prizes) if args.prizes else SAMPLE_PRIZES
    rng = _make_rng(args.seed)

    session = LadderSession(
        prizes, rng=rng, min_rungs=args.min_rungs, max_rungs=args.max_rungs,
    )
    _check(session.set_players(args.players, args.names))
    _check(session.begin_prize_selection())

    # A repeated id would toggle the restaurant back off
    picks = list(dict.fromkeys(args.pick)) if args.pick else [
        p.id for p in rng.sample(prizes, session.player_count)
    ]
    for prize_id in picks:
        _check(session.toggle_prize(prize_id))
    print(_check(session.confirm_prizes()).message)
    print()
    print(render_ladder(session.ladder, session.player_names))

    if args.reveal_all:
        _check(session.reveal_all())
    else:
        order = args.order if args.order is not None else range(session.player_count)
        for column in order:
            result = session.play(column)
            if result.error == ALREADY_PLAYED:
                print(result.message)
                continue
            _check(result)
            revealed = [t.terminal_column for t in session.traversals.values()]
            print()
            print(render_ladder(
                session.ladder, session.player_names,
                highlight=result.traversal, revealed=revealed,
            ))
            print(result.message)
            _check(session.finish_animation())
        if session.unplayed_columns():
            _check(session.reveal_all())

    print("\nResults")
    print("=" * 40)
    for name, prize in session.outcomes():
        print(f"  {name:20s} → {prize.name}")

    if args.output:
        path = write_round_json(session, args.output)
        print(f"\nRound saved to {path}")


# ── stats ────────────────────────────────────────────────────────────

def cmd_stats(args: argparse.Namespace) -> None:
    """Print how often each start column reaches each terminal column."""
    _check_simulation_args(args)
    report = simulate_fairness(
        args.columns, trials=args.trials, rng=_make_rng(args.seed),
        min_rungs=args.min_rungs, max_rungs=args.max_rungs,
    )
    print(f"\nOutcome odds over {report.trials} ladders")
    print("=" * 40)
    print("start  " + " ".join(f"{t:>6d}" for t in range(report.column_count)))
    for start, row in enumerate(report.probabilities()):
        print(f"{start:>5d}  " + " ".join(f"{p:6.3f}" for p in row))
    print(f"\nMax deviation from uniform: {report.max_bias():.3f}")


# ── chart ────────────────────────────────────────────────────────────

def cmd_chart(args: argparse.Namespace) -> None:
    """Generate the outcome-odds heatmap."""
    _check_simulation_args(args)
    report = simulate_fairness(
        args.columns, trials=args.trials, rng=_make_rng(args.seed),
        min_rungs=args.min_rungs, max_rungs=args.max_rungs,
    )
    out = args.output or "ladder_fairness.png"
    make_fairness_chart(report, output_path=out)
    print(f"Chart saved to {out}")


# ── main ─────────────────────────────────────────────────────────────

def _add_ladder_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seed", type=int, help="Random seed for a reproducible ladder")
    p.add_argument("--min-rungs", type=int, default=MIN_RUNGS, help=f"Fewest rungs (default {MIN_RUNGS})")
    p.add_argument("--max-rungs", type=int, default=MAX_RUNGS, help=f"Most rungs (default {MAX_RUNGS})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghost_leg",
        description="Ghost-leg ladder game for picking lunch",
    )
    sub = parser.add_subparsers(dest="command")

    p_play = sub.add_parser("play", help="Play a round")
    p_play.add_argument("--players", type=int, help="Number of players (default: one per name, else 3)")
    p_play.add_argument("--names", nargs="*", help="Player names, in column order")
    p_play.add_argument("--prizes", help="JSON file of restaurants (default: built-in list)")
    p_play.add_argument("--pick", nargs="*", help="Restaurant ids to put on the ladder")
    p_play.add_argument("--order", type=int, nargs="*", help="Columns to play, in order")
    p_play.add_argument("--reveal-all", action="store_true", help="Skip per-player reveals")
    p_play.add_argument("--output", "-o", help="Save the round as JSON")
    _add_ladder_options(p_play)

    for name, help_text in (("stats", "Print outcome odds"), ("chart", "Generate outcome-odds heatmap")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--columns", type=int, default=3, help="Columns per ladder (default 3)")
        p.add_argument("--trials", type=int, default=1000, help="Ladders to generate (default 1000)")
        if name == "chart":
            p.add_argument("--output", "-o", help="Output PNG path")
        _add_ladder_options(p)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "play":
        cmd_play(args)
    elif args.command == "stats":
        cmd_stats(args)
    elif args.command == "chart":
        cmd_chart(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
