"""Board topology and movement rules for Snakes & Ladders."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Literal, Mapping

from snakes_ladders.errors import InvalidTopologyError

DEFAULT_SIZE = 100
MIN_BOARD_SIZE = 6  # smallest board where a bounce-back can never leave the grid
DIE_FACES = 6

TransportKind = Literal["snake", "ladder"]

# fmt: off
DEFAULT_SNAKES: dict[int, int] = {
    # head: tail
    16:  6,  47: 26,  49: 11,  56: 53,  62: 19,
    64: 60,  87: 24,  93: 73,  95: 75,  98: 78,
}

DEFAULT_LADDERS: dict[int, int] = {
    # bottom: top
     1: 38,   4: 14,   9: 31,  21: 42,  28: 84,
    36: 44,  51: 67,  71: 91,  80: 99,
}
# fmt: on


@dataclass(frozen=True)
class BoardTopology:
    """Static snake/ladder layout. Built once per game, never mutated."""

    size: int = DEFAULT_SIZE
    snakes: Mapping[int, int] = field(default_factory=dict)
    ladders: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only copies: callers keep no handle on the live tables.
        object.__setattr__(self, "snakes", MappingProxyType(dict(self.snakes)))
        object.__setattr__(self, "ladders", MappingProxyType(dict(self.ladders)))

    def transport_from(self, cell: int) -> int | None:
        dest = self.snakes.get(cell)
        if dest is None:
            dest = self.ladders.get(cell)
        return dest

    def is_snake(self, cell: int) -> bool:
        return cell in self.snakes

    def is_ladder(self, cell: int) -> bool:
        return cell in self.ladders

    def transport_kind(self, cell: int) -> TransportKind | None:
        if cell in self.snakes:
            return "snake"
        if cell in self.ladders:
            return "ladder"
        return None

    def validate(self) -> None:
        """Raise :class:`InvalidTopologyError` if any board invariant fails."""
        if self.size < MIN_BOARD_SIZE:
            raise InvalidTopologyError(
                f"Board size must be at least {MIN_BOARD_SIZE}, got {self.size}."
            )

        overlap = set(self.snakes) & set(self.ladders)
        if overlap:
            raise InvalidTopologyError(
                f"Cells {sorted(overlap)} are both a snake head and a ladder bottom."
            )

        for head, tail in self.snakes.items():
            self._check_cells("Snake", head, tail)
            if head <= tail:
                raise InvalidTopologyError(
                    f"Snake {head} → {tail} must go down."
                )

        for bottom, top in self.ladders.items():
            self._check_cells("Ladder", bottom, top)
            if bottom >= top:
                raise InvalidTopologyError(
                    f"Ladder {bottom} → {top} must go up."
                )

    def _check_cells(self, label: str, start: int, end: int) -> None:
        for cell in (start, end):
            if not 1 <= cell <= self.size:
                raise InvalidTopologyError(
                    f"{label} {start} → {end} leaves the board (1–{self.size})."
                )
            # The final cell is only ever reached by an exact roll.
            if cell == self.size:
                raise InvalidTopologyError(
                    f"{label} {start} → {end} touches the final cell {self.size}."
                )

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "snakes": {str(k): v for k, v in sorted(self.snakes.items())},
            "ladders": {str(k): v for k, v in sorted(self.ladders.items())},
        }


def default_topology(size: int = DEFAULT_SIZE) -> BoardTopology:
    """The classic board. Smaller boards keep only the transports that fit."""

    def fits(mapping: dict[int, int]) -> dict[int, int]:
        return {k: v for k, v in mapping.items() if k < size and v < size}

    return BoardTopology(
        size=size,
        snakes=fits(DEFAULT_SNAKES),
        ladders=fits(DEFAULT_LADDERS),
    )


def load_topology(path: Path | str) -> BoardTopology:
    """Read a board from a JSON file and validate it.

    Expected shape::

        {"size": 100, "snakes": {"16": 6}, "ladders": {"1": 38}}
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidTopologyError(f"Can't read board file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidTopologyError(f"Board file {path} must hold a JSON object.")

    try:
        topology = BoardTopology(
            size=int(raw.get("size", DEFAULT_SIZE)),
            snakes=_int_mapping(raw.get("snakes", {})),
            ladders=_int_mapping(raw.get("ladders", {})),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidTopologyError(f"Malformed board file {path}: {exc}") from exc

    topology.validate()
    return topology


def _int_mapping(raw: dict) -> dict[int, int]:
    return {int(k): int(v) for k, v in raw.items()}


# ── Movement ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MoveResolution:
    """Where a roll takes a token, before any snake or ladder."""

    start: int
    roll: int
    target: int
    final: int
    forward: tuple[int, ...] = ()
    backward: tuple[int, ...] = ()

    @property
    def bounced(self) -> bool:
        return self.final < self.target

    @property
    def steps(self) -> list[tuple[int, int]]:
        """Every unit step as ``(from_cell, to_cell)``, in walking order."""
        cells = [self.start, *self.forward, *self.backward]
        return list(zip(cells, cells[1:]))


def resolve_roll(position: int, roll: int, size: int = DEFAULT_SIZE) -> MoveResolution:
    """Compute the result of a token on *position* rolling *roll*.

    Overshooting the final cell walks up to it and bounces back by the
    excess. Pure: no snakes or ladders are applied here.
    """
    target = position + roll

    if target <= size:
        return MoveResolution(
            start=position,
            roll=roll,
            target=target,
            final=target,
            forward=tuple(range(position + 1, target + 1)),
        )

    final = size - (target - size)
    assert final >= 1, f"bounce from {position} by {roll} leaves a {size}-cell board"
    return MoveResolution(
        start=position,
        roll=roll,
        target=target,
        final=final,
        forward=tuple(range(position + 1, size + 1)),
        backward=tuple(range(size - 1, final - 1, -1)),
    )


def cell_to_grid(cell: int, size: int = DEFAULT_SIZE, columns: int = 10) -> tuple[int, int]:
    """Map *cell* to a 0-based ``(row, col)``, row 0 at the top.

    The bottom row runs left to right and each row above reverses
    direction, so the path snakes up the board.
    """
    rows = math.ceil(size / columns)
    row_from_bottom = (cell - 1) // columns
    offset = (cell - 1) % columns
    col = offset if row_from_bottom % 2 == 0 else columns - 1 - offset
    return rows - 1 - row_from_bottom, col
