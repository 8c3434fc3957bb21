"""Round state machine: setup, prize selection, per-player reveals, results."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from ghost_leg.ladder import (
    MAX_RUNGS,
    MIN_RUNGS,
    Ladder,
    RevealStep,
    TraversalResult,
    generate_ladder,
    resolve_path,
    reveal_steps,
)
from ghost_leg.prizes import Prize

# ── Phases ───────────────────────────────────────────────────────────

SETUP = "setup"
SELECTING_PRIZES = "selecting_prizes"
READY = "ready"
PLAYING = "playing"
RESULT = "result"

# ── Rejection reasons ────────────────────────────────────────────────

INVALID_COLUMN_COUNT = "invalid_column_count"
NOT_ENOUGH_PRIZES = "not_enough_prizes"
PRIZE_SELECTION_MISMATCH = "prize_selection_mismatch"
SELECTION_FULL = "selection_full"
UNKNOWN_PRIZE = "unknown_prize"
ALREADY_PLAYED = "already_played"
ANIMATION_IN_PROGRESS = "animation_in_progress"
INVALID_COLUMN = "invalid_column"
INVALID_STATE = "invalid_state"
PLAYER_NAME_MISMATCH = "player_name_mismatch"

DEFAULT_PLAYER_COUNT = 3


def default_player_name(index: int) -> str:
    return f"Player {index + 1}"


# ── Action result ────────────────────────────────────────────────────

@dataclass
class ActionResult:
    ok: bool = True
    message: str = ""
    error: str | None = None
    traversal: TraversalResult | None = None
    steps: list[RevealStep] = field(default_factory=list)
    prize: Prize | None = None
    results: dict[int, Prize] | None = None


def _reject(error: str, message: str) -> ActionResult:
    return ActionResult(ok=False, error=error, message=message)


# ── Observer ────────────────────────────────────────────────────────

@dataclass
class LogEntry:
    """Record of a single session action."""

    sequence: int
    action: str
    args: dict
    phase_before: str
    phase_after: str
    result_ok: bool
    result_message: str
    error: str | None = None
    played_after: list[int] = field(default_factory=list)


class SessionObserver(Protocol):
    """Receives structured events as a round is played."""

    def on_action(self, entry: LogEntry) -> None: ...


@dataclass
class ListObserver:
    """Default observer, collects entries into a list."""

    entries: list[LogEntry] = field(default_factory=list)

    def on_action(self, entry: LogEntry) -> None:
        self.entries.append(entry)


# ── Session ──────────────────────────────────────────────────────────

class LadderSession:
    """One group's ladder round, from picking players to the final results.

    Every operation returns an :class:`ActionResult`. A rejected operation
    (``ok=False``) leaves the session exactly as it was.
    """

    def __init__(
        self,
        available_prizes: Sequence[Prize],
        rng: random.Random | None = None,
        min_rungs: int = MIN_RUNGS,
        max_rungs: int = MAX_RUNGS,
        observer: SessionObserver | None = None,
    ):
        self.available_prizes = list(available_prizes)
        self.rng = rng or random.Random()
        self.min_rungs = min_rungs
        self.max_rungs = max_rungs
        self.observer = observer or ListObserver()
        self._sequence = 0
        self._clear()

    def _clear(self) -> None:
        self.phase = SETUP
        self.player_names: list[str] = []
        self.selected_prizes: list[Prize] = []
        self._clear_round()
        self.ladder: Ladder | None = None

    def _clear_round(self) -> None:
        self.played: list[int] = []
        self.results: dict[int, Prize] = {}
        self.traversals: dict[int, TraversalResult] = {}
        self.is_animating = False

    # ── Read-only views ──

    @property
    def player_count(self) -> int:
        return len(self.player_names)

    def unplayed_columns(self) -> list[int]:
        return [c for c in range(self.player_count) if c not in self.results]

    def outcomes(self) -> list[tuple[str, Prize]]:
        """(player name, prize) for every resolved player, by column."""
        return [(self.player_names[c], self.results[c]) for c in sorted(self.results)]

    # ── Setup ──

    def set_players(
        self, count: int | None = None, names: Sequence[str] | None = None,
    ) -> ActionResult:
        """Choose who takes part.

        With *names* the player count is ``len(names)``; *count*, if also
        given, must agree. With neither, :data:`DEFAULT_PLAYER_COUNT` players
        are created. Blank names and missing names get ``Player N`` defaults.
        """
        given = list(names or [])
        args = {"count": count, "names": given}
        before = self.phase
        if self.phase != SETUP:
            return self._log("set_players", args, before, _reject(
                INVALID_STATE, "Players can only be changed during setup."))
        if count is not None and given and len(given) != count:
            return self._log("set_players", args, before, _reject(
                PLAYER_NAME_MISMATCH,
                f"Got {len(given)} names for {count} players."))
        if count is None:
            count = len(given) if given else DEFAULT_PLAYER_COUNT
        if count < 2:
            return self._log("set_players", args, before, _reject(
                INVALID_COLUMN_COUNT, f"At least 2 players are needed, got {count}."))

        self.player_names = [
            given[i].strip() if i < len(given) and given[i].strip() else default_player_name(i)
            for i in range(count)
        ]
        return self._log("set_players", args, before, ActionResult(
            ok=True, message=f"{count} players: {', '.join(self.player_names)}."))

    def begin_prize_selection(self) -> ActionResult:
        before = self.phase
        if self.phase != SETUP:
            return self._log("begin_prize_selection", {}, before, _reject(
                INVALID_STATE, "Prize selection starts from setup."))
        if self.player_count < 2:
            return self._log("begin_prize_selection", {}, before, _reject(
                INVALID_COLUMN_COUNT, "Choose at least 2 players first."))
        if len(self.available_prizes) < self.player_count:
            return self._log("begin_prize_selection", {}, before, _reject(
                NOT_ENOUGH_PRIZES,
                f"At least {self.player_count} restaurants are needed, "
                f"only {len(self.available_prizes)} available."))

        self.selected_prizes = []
        self.phase = SELECTING_PRIZES
        return self._log("begin_prize_selection", {}, before, ActionResult(
            ok=True, message=f"Pick {self.player_count} restaurants."))

    def toggle_prize(self, prize_id: str) -> ActionResult:
        """Select a restaurant, or deselect it if already selected."""
        args = {"prize_id": prize_id}
        before = self.phase
        if self.phase != SELECTING_PRIZES:
            return self._log("toggle_prize", args, before, _reject(
                INVALID_STATE, "Not selecting restaurants right now."))

        for i, prize in enumerate(self.selected_prizes):
            if prize.id == prize_id:
                del self.selected_prizes[i]
                return self._log("toggle_prize", args, before, ActionResult(
                    ok=True, prize=prize, message=f"Removed {prize.name}."))

        prize = next((p for p in self.available_prizes if p.id == prize_id), None)
        if prize is None:
            return self._log("toggle_prize", args, before, _reject(
                UNKNOWN_PRIZE, f"No restaurant with id {prize_id!r}."))
        if len(self.selected_prizes) >= self.player_count:
            return self._log("toggle_prize", args, before, _reject(
                SELECTION_FULL, f"Already picked {self.player_count} restaurants."))

        self.selected_prizes.append(prize)
        return self._log("toggle_prize", args, before, ActionResult(
            ok=True, prize=prize,
            message=f"Added {prize.name} ({len(self.selected_prizes)}/{self.player_count})."))

    def confirm_prizes(self) -> ActionResult:
        """Lock in the selection and build the ladder."""
        before = self.phase
        if self.phase != SELECTING_PRIZES:
            return self._log("confirm_prizes", {}, before, _reject(
                INVALID_STATE, "Not selecting restaurants right now."))
        if len(self.selected_prizes) != self.player_count:
            return self._log("confirm_prizes", {}, before, _reject(
                PRIZE_SELECTION_MISMATCH,
                f"Select exactly {self.player_count} restaurants "
                f"(currently {len(self.selected_prizes)})."))

        self._build_ladder()
        self.phase = READY
        return self._log("confirm_prizes", {}, before, ActionResult(
            ok=True, message=f"Ladder ready with {len(self.ladder.rungs)} rungs."))

    def _build_ladder(self) -> None:
        self.ladder = generate_ladder(
            self.player_count,
            self.selected_prizes,
            rng=self.rng,
            min_rungs=self.min_rungs,
            max_rungs=self.max_rungs,
        )
        self._clear_round()

    # ── Playing ──

    def play(self, column: int) -> ActionResult:
        """Send one player down the ladder.

        The result is recorded immediately; the session then stays in
        ``playing`` until the caller reports the reveal finished via
        :meth:`finish_animation`.
        """
        args = {"column": column}
        before = self.phase
        if self.is_animating:
            return self._log("play", args, before, _reject(
                ANIMATION_IN_PROGRESS, "Wait for the current player to reach the bottom."))
        if self.phase != READY:
            return self._log("play", args, before, _reject(
                INVALID_STATE, f"Cannot play during {self.phase}."))
        if not 0 <= column < self.player_count:
            return self._log("play", args, before, _reject(
                INVALID_COLUMN, f"No player in column {column}."))
        if column in self.results:
            return self._log("play", args, before, _reject(
                ALREADY_PLAYED, f"{self.player_names[column]} has already played."))

        traversal = resolve_path(self.ladder, column)
        prize = self._record(traversal)
        self.is_animating = True
        self.phase = PLAYING
        return self._log("play", args, before, ActionResult(
            ok=True,
            traversal=traversal,
            steps=reveal_steps(self.ladder, column),
            prize=prize,
            message=f'{self.player_names[column]} is going to "{prize.name}"!'))

    def finish_animation(self) -> ActionResult:
        before = self.phase
        if self.phase != PLAYING:
            return self._log("finish_animation", {}, before, _reject(
                INVALID_STATE, "No reveal in progress."))

        self.is_animating = False
        self.phase = RESULT if not self.unplayed_columns() else READY
        remaining = len(self.unplayed_columns())
        message = "Everyone has played." if remaining == 0 else f"{remaining} players left."
        return self._log("finish_animation", {}, before, ActionResult(ok=True, message=message))

    def reveal_all(self) -> ActionResult:
        """Resolve every remaining player at once and end the round."""
        before = self.phase
        if self.is_animating:
            return self._log("reveal_all", {}, before, _reject(
                ANIMATION_IN_PROGRESS, "Wait for the current player to reach the bottom."))
        if self.phase not in (READY, RESULT):
            return self._log("reveal_all", {}, before, _reject(
                INVALID_STATE, f"Cannot reveal results during {self.phase}."))

        for column in self.unplayed_columns():
            self._record(resolve_path(self.ladder, column))
        self.phase = RESULT
        return self._log("reveal_all", {}, before, ActionResult(
            ok=True, results=dict(self.results), message="All results revealed."))

    def _record(self, traversal: TraversalResult) -> Prize:
        column = traversal.start_column
        prize = self.ladder.prize_for(traversal.terminal_column)
        self.traversals[column] = traversal
        self.results[column] = prize
        self.played.append(column)
        return prize

    # ── Restarting ──

    def new_ladder(self) -> ActionResult:
        """Same players and restaurants, freshly drawn ladder."""
        before = self.phase
        if self.is_animating:
            return self._log("new_ladder", {}, before, _reject(
                ANIMATION_IN_PROGRESS, "Wait for the current player to reach the bottom."))
        if self.phase not in (READY, RESULT):
            return self._log("new_ladder", {}, before, _reject(
                INVALID_STATE, f"No ladder to replace during {self.phase}."))

        self._build_ladder()
        self.phase = READY
        return self._log("new_ladder", {}, before, ActionResult(
            ok=True, message=f"New ladder with {len(self.ladder.rungs)} rungs."))

    def reset_game(self) -> ActionResult:
        before = self.phase
        self._clear()
        return self._log("reset_game", {}, before, ActionResult(ok=True, message="Game reset."))

    # ── Logging ──

    def _log(self, action: str, args: dict, phase_before: str, result: ActionResult) -> ActionResult:
        self._sequence += 1
        self.observer.on_action(LogEntry(
            sequence=self._sequence,
            action=action,
            args=args,
            phase_before=phase_before,
            phase_after=self.phase,
            result_ok=result.ok,
            result_message=result.message,
            error=result.error,
            played_after=list(self.played),
        ))
        return result
