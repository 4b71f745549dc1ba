"""Per-player state and roster construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from snakes_ladders.errors import InvalidRosterError

MIN_PLAYERS = 2
MAX_PLAYERS = 4
START_CELL = 1


@dataclass
class Player:
    """One seat at the table. Mutated only by the game engine."""

    id: int
    name: str
    position: int = START_CELL
    finished: bool = False
    rank: int | None = None

    def advance_to(self, position: int) -> None:
        self.position = position

    def mark_finished(self, rank: int) -> None:
        assert not self.finished, f"{self.name} already finished (rank {self.rank})"
        self.finished = True
        self.rank = rank

    def award_last_place(self, rank: int) -> None:
        """Rank the last player standing without a landing on the final cell."""
        assert not self.finished, f"{self.name} already finished (rank {self.rank})"
        assert self.rank is None, f"{self.name} already ranked {self.rank}"
        self.rank = rank


def make_roster(names: Iterable[str]) -> list[Player]:
    """Seat players in the given order. Seat index doubles as player id."""
    cleaned = [name.strip() if isinstance(name, str) else "" for name in names]

    if not MIN_PLAYERS <= len(cleaned) <= MAX_PLAYERS:
        raise InvalidRosterError(
            f"Need {MIN_PLAYERS}–{MAX_PLAYERS} players, got {len(cleaned)}."
        )
    blank = [i + 1 for i, name in enumerate(cleaned) if not name]
    if blank:
        raise InvalidRosterError(f"Player name(s) at seat {blank} are empty.")

    return [Player(id=i, name=name) for i, name in enumerate(cleaned)]
