"""Headless playouts: how long games run and who tends to win from which seat."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from snakes_ladders.board import BoardTopology
from snakes_ladders.dice import RandomDie
from snakes_ladders.game import GameEngine, create_game

logger = logging.getLogger(__name__)

MAX_TURNS = 10_000  # safety valve; a real game ends in well under 1000 rolls


def play_out(engine: GameEngine, max_turns: int = MAX_TURNS) -> GameEngine:
    """Roll until the game ends, acknowledging every rank announcement."""
    while not engine.ended and len(engine.history) < max_turns:
        engine.request_roll()
        engine.acknowledge()
    if not engine.ended:
        logger.warning("Game stopped after %d rolls without a result", len(engine.history))
    return engine


@dataclass
class SimulationSummary:
    """Aggregate results of many playouts."""

    games: int = 0
    players: int = 2
    turns: list[int] = field(default_factory=list)  # rolls per game
    # rank_counts[seat][rank - 1] = how often that seat placed that rank
    rank_counts: list[list[int]] = field(default_factory=list)
    snakes_hit: int = 0
    ladders_hit: int = 0
    bounces: int = 0
    bonus_turns: int = 0
    unfinished: int = 0

    def __post_init__(self):
        if not self.rank_counts:
            self.rank_counts = [[0] * self.players for _ in range(self.players)]

    @property
    def mean_turns(self) -> float:
        return sum(self.turns) / len(self.turns) if self.turns else 0.0

    @property
    def min_turns(self) -> int:
        return min(self.turns, default=0)

    @property
    def max_turns(self) -> int:
        return max(self.turns, default=0)

    def win_rate(self, seat: int) -> float:
        completed = self.games - self.unfinished
        if completed == 0:
            return 0.0
        return self.rank_counts[seat][0] / completed

    def record(self, engine: GameEngine) -> None:
        self.games += 1
        self.turns.append(len(engine.history))
        for turn in engine.history:
            if turn.transport_kind == "snake":
                self.snakes_hit += 1
            elif turn.transport_kind == "ladder":
                self.ladders_hit += 1
            self.bounces += turn.bounced
            self.bonus_turns += turn.bonus_turn

        if not engine.ended:
            self.unfinished += 1
            return
        for player in engine.players:
            self.rank_counts[player.id][player.rank - 1] += 1


def simulate(
    games: int,
    players: int = 2,
    seed: int | None = None,
    topology: BoardTopology | None = None,
    max_turns: int = MAX_TURNS,
) -> SimulationSummary:
    """Play *games* full games with *players* seats and tally the results."""
    die = RandomDie(seed)
    names = [f"Player {i + 1}" for i in range(players)]
    summary = SimulationSummary(players=players)

    for _ in range(games):
        engine = create_game(names, topology=topology, die=die)
        summary.record(play_out(engine, max_turns=max_turns))

    logger.info(
        "Simulated %d games: mean %.1f rolls (min %d, max %d)",
        summary.games, summary.mean_turns, summary.min_turns, summary.max_turns,
    )
    return summary
