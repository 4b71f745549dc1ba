"""Turn engine: drives a 2–4 player Snakes & Ladders game.

One roll is resolved at a time: roll → walk (bouncing off the final
cell) → finish or snake/ladder → end-of-round → next player. The engine
never renders anything; it asks a :class:`PresentationPort` to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from snakes_ladders.board import (
    DEFAULT_SIZE,
    DIE_FACES,
    BoardTopology,
    MoveResolution,
    default_topology,
    resolve_roll,
)
from snakes_ladders.dice import Die, RandomDie
from snakes_ladders.errors import InvalidTopologyError
from snakes_ladders.players import Player, make_roster
from snakes_ladders.presentation import (
    BOUNCE_PAUSE_MS,
    TRANSPORT_PAUSE_MS,
    NullPresentation,
    PresentationPort,
)

logger = logging.getLogger(__name__)


class EnginePhase(str, Enum):
    AWAITING_ROLL = "awaiting_roll"
    RESOLVING = "resolving"
    CELEBRATING = "celebrating"  # waiting for acknowledge() after a finish
    GAME_OVER = "game_over"


# ── Structured types ────────────────────────────────────────────────

@dataclass
class TurnResult:
    """Record of a single resolved roll."""

    turn_number: int
    player: int
    roll: int
    start_position: int
    landing: int  # after any bounce, before any snake/ladder
    final_position: int
    bounced: bool = False
    transport_kind: str | None = None  # "snake" | "ladder"
    transport_dest: int | None = None
    finished: bool = False
    rank: int | None = None
    bonus_turn: bool = False
    outcome: str = "normal"  # "normal" | "celebration" | "game_over"


@dataclass(frozen=True)
class PlayerView:
    id: int
    name: str
    position: int
    finished: bool
    rank: int | None


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of the game for rendering."""

    size: int
    players: tuple[PlayerView, ...]
    current_player_index: int
    finish_order: tuple[int, ...]
    phase: EnginePhase
    ended: bool
    turn_in_progress: bool
    turns_played: int

    @property
    def current_player(self) -> PlayerView:
        return self.players[self.current_player_index]


# ── Engine ──────────────────────────────────────────────────────────

class GameEngine:
    """Owns the game state; the only thing that mutates players."""

    def __init__(
        self,
        players: list[Player],
        topology: BoardTopology | None = None,
        die: Die | None = None,
        presentation: PresentationPort | None = None,
    ):
        assert len(players) >= 2, "a game needs at least two players"
        self.players = players
        self.names = [p.name for p in players]
        self.topology = topology or default_topology()
        self.die = die or RandomDie()
        self.presentation = presentation or NullPresentation()
        self._reset_state()

    def _reset_state(self) -> None:
        self.current_player_index = 0
        self.finish_order: list[Player] = []
        self.ended = False
        self.turn_in_progress = False
        self.phase = EnginePhase.AWAITING_ROLL
        self.history: list[TurnResult] = []
        self._celebrating: TurnResult | None = None

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    # ── Public API ──────────────────────────────────────────────────

    def request_roll(self) -> TurnResult | None:
        """Roll for the current player and resolve the whole turn.

        Returns ``None`` without touching the die when a turn is already
        in progress or the game is over. Repeated clicks are harmless.
        """
        if self.turn_in_progress or self.ended:
            logger.debug("Roll ignored (phase=%s)", self.phase.value)
            return None

        player = self.current_player
        assert not player.finished, f"{player.name} has finished but holds the turn"

        roll = self.die.roll()
        assert 1 <= roll <= DIE_FACES, f"die returned {roll}"
        self.turn_in_progress = True
        self.phase = EnginePhase.RESOLVING
        logger.debug("%s rolls %d from %d", player.name, roll, player.position)
        self.presentation.on_roll(player, roll)

        result = self._resolve(player, roll)

        if result.outcome == "normal":
            self._advance_turn(result)
        # "celebration" waits for acknowledge(); "game_over" is terminal.
        return result

    def acknowledge(self) -> bool:
        """Continue after a mid-game rank announcement.

        Returns False (and does nothing) if nothing is being celebrated.
        """
        if self.phase is not EnginePhase.CELEBRATING:
            return False
        result = self._celebrating
        self._celebrating = None
        self._advance_turn(result)
        return True

    def get_state(self) -> GameSnapshot:
        return GameSnapshot(
            size=self.topology.size,
            players=tuple(
                PlayerView(p.id, p.name, p.position, p.finished, p.rank)
                for p in self.players
            ),
            current_player_index=self.current_player_index,
            finish_order=tuple(p.id for p in self.finish_order),
            phase=self.phase,
            ended=self.ended,
            turn_in_progress=self.turn_in_progress,
            turns_played=len(self.history),
        )

    def standings(self) -> list[Player]:
        """Ranked players first, then everyone else by position (furthest first)."""
        unranked = [p for p in self.players if p.rank is None]
        unranked.sort(key=lambda p: (-p.position, p.id))
        return list(self.finish_order) + unranked

    def restart(self) -> None:
        """Discard every player and reseat the same names on cell 1."""
        logger.info("Restarting game for %s", ", ".join(self.names))
        self.players = make_roster(self.names)
        self._reset_state()

    # ── Resolution ──────────────────────────────────────────────────

    def _resolve(self, player: Player, roll: int) -> TurnResult:
        size = self.topology.size
        move = resolve_roll(player.position, roll, size)
        result = TurnResult(
            turn_number=len(self.history) + 1,
            player=player.id,
            roll=roll,
            start_position=move.start,
            landing=move.final,
            final_position=move.final,
            bounced=move.bounced,
        )
        self.history.append(result)

        self._walk(player, move)
        player.advance_to(move.final)
        if move.bounced:
            logger.debug("%s overshoots by %d, bounces back to %d",
                         player.name, move.target - size, move.final)

        if player.position == size:
            self._record_finish(player, result)
        else:
            self._apply_transport(player, result)
        return result

    def _walk(self, player: Player, move: MoveResolution) -> None:
        size = self.topology.size
        for from_cell, to_cell in move.steps:
            if from_cell == size:
                self.presentation.on_pause(BOUNCE_PAUSE_MS)
            self.presentation.on_step(player, from_cell, to_cell)

    def _apply_transport(self, player: Player, result: TurnResult) -> None:
        origin = player.position
        dest = self.topology.transport_from(origin)
        if dest is None:
            return

        kind = self.topology.transport_kind(origin)
        self.presentation.on_pause(TRANSPORT_PAUSE_MS)
        player.advance_to(dest)
        self.presentation.on_transport(player, origin, dest, kind)
        logger.debug("%s takes the %s %d → %d", player.name, kind, origin, dest)

        result.transport_kind = kind
        result.transport_dest = dest
        result.final_position = dest

    def _record_finish(self, player: Player, result: TurnResult) -> None:
        self.finish_order.append(player)
        rank = len(self.finish_order)
        player.mark_finished(rank)
        result.finished = True
        result.rank = rank
        logger.debug("%s finishes in place %d", player.name, rank)

        remaining = [p for p in self.players if not p.finished]
        if len(remaining) <= 1:
            result.outcome = "game_over"
            self.presentation.on_player_finished(player, rank, True)
            self._end_game(remaining)
        else:
            result.outcome = "celebration"
            self.phase = EnginePhase.CELEBRATING
            self._celebrating = result
            self.presentation.on_player_finished(player, rank, False)

    def _end_game(self, remaining: Iterable[Player]) -> None:
        for survivor in remaining:
            self.finish_order.append(survivor)
            survivor.award_last_place(len(self.finish_order))

        self.ended = True
        self.turn_in_progress = False
        self.phase = EnginePhase.GAME_OVER
        standings = self.standings()
        logger.info(
            "Game over after %d turns: %s",
            len(self.history),
            ", ".join(f"{p.rank}. {p.name}" for p in standings),
        )
        self.presentation.on_game_over(standings)

    # ── Turn order ──────────────────────────────────────────────────

    def _advance_turn(self, result: TurnResult) -> None:
        # A six earns another roll, unless that roll finished the player.
        if result.roll == DIE_FACES and not result.finished:
            result.bonus_turn = True
            logger.debug("%s rolled a six and goes again", self.current_player.name)
        else:
            self.current_player_index = self._next_index()

        self.phase = EnginePhase.AWAITING_ROLL
        self.turn_in_progress = False
        self.presentation.on_turn_advanced(self.current_player)

    def _next_index(self) -> int:
        total = len(self.players)
        idx = self.current_player_index
        for _ in range(total):
            idx = (idx + 1) % total
            if not self.players[idx].finished:
                break
        return idx


def create_game(
    player_names: Iterable[str],
    size: int | None = None,
    topology: BoardTopology | None = None,
    die: Die | None = None,
    presentation: PresentationPort | None = None,
) -> GameEngine:
    """Build a validated game.

    Raises :class:`InvalidRosterError` for a bad roster and
    :class:`InvalidTopologyError` for a bad board.
    """
    players = make_roster(player_names)

    if topology is None:
        topology = default_topology(DEFAULT_SIZE if size is None else size)
    elif size is not None and size != topology.size:
        raise InvalidTopologyError(
            f"Board size {size} doesn't match the topology's size {topology.size}."
        )
    topology.validate()

    logger.info(
        "New game on a %d-cell board: %s",
        topology.size, ", ".join(p.name for p in players),
    )
    return GameEngine(players, topology=topology, die=die, presentation=presentation)
