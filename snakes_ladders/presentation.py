"""Presentation port: the callbacks the engine drives a UI through."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from snakes_ladders.board import TransportKind
    from snakes_ladders.players import Player

# Pauses requested from the UI, in milliseconds.
BOUNCE_PAUSE_MS = 200
TRANSPORT_PAUSE_MS = 400


@runtime_checkable
class PresentationPort(Protocol):
    """Structural interface: any object with these methods works.

    Every call is fire-and-continue. The one exception is a non-decisive
    ``on_player_finished``: the engine stays in its celebration state
    until the UI calls ``GameEngine.acknowledge()``.
    """

    def on_roll(self, player: Player, value: int) -> None: ...

    def on_step(self, player: Player, from_cell: int, to_cell: int) -> None: ...

    def on_pause(self, milliseconds: int) -> None: ...

    def on_transport(
        self, player: Player, from_cell: int, to_cell: int, kind: TransportKind,
    ) -> None: ...

    def on_player_finished(self, player: Player, rank: int, decisive: bool) -> None: ...

    def on_game_over(self, standings: Sequence[Player]) -> None: ...

    def on_turn_advanced(self, player: Player) -> None: ...


class NullPresentation:
    """Headless port: ignores every effect."""

    def on_roll(self, player, value):
        pass

    def on_step(self, player, from_cell, to_cell):
        pass

    def on_pause(self, milliseconds):
        pass

    def on_transport(self, player, from_cell, to_cell, kind):
        pass

    def on_player_finished(self, player, rank, decisive):
        pass

    def on_game_over(self, standings):
        pass

    def on_turn_advanced(self, player):
        pass


# ── Recording ───────────────────────────────────────────────────────

@dataclass
class Effect:
    """One presentation request, as the engine issued it."""

    kind: str  # "roll" | "step" | "pause" | "transport" | "finished" | "game_over" | "turn"
    player: int | None = None
    from_cell: int | None = None
    to_cell: int | None = None
    value: int | None = None
    detail: str | None = None
    standings: list[int] = field(default_factory=list)


@dataclass
class RecordingPresentation:
    """Default observer for tests and replays; collects effects into a list."""

    effects: list[Effect] = field(default_factory=list)

    def kinds(self) -> list[str]:
        return [e.kind for e in self.effects]

    def of_kind(self, kind: str) -> list[Effect]:
        return [e for e in self.effects if e.kind == kind]

    def clear(self) -> None:
        self.effects.clear()

    def on_roll(self, player: Player, value: int) -> None:
        self.effects.append(Effect("roll", player=player.id, value=value))

    def on_step(self, player: Player, from_cell: int, to_cell: int) -> None:
        self.effects.append(Effect("step", player=player.id, from_cell=from_cell, to_cell=to_cell))

    def on_pause(self, milliseconds: int) -> None:
        self.effects.append(Effect("pause", value=milliseconds))

    def on_transport(
        self, player: Player, from_cell: int, to_cell: int, kind: TransportKind,
    ) -> None:
        self.effects.append(Effect(
            "transport", player=player.id,
            from_cell=from_cell, to_cell=to_cell, detail=kind,
        ))

    def on_player_finished(self, player: Player, rank: int, decisive: bool) -> None:
        self.effects.append(Effect(
            "finished", player=player.id, value=rank,
            detail="decisive" if decisive else "celebration",
        ))

    def on_game_over(self, standings: Sequence[Player]) -> None:
        self.effects.append(Effect("game_over", standings=[p.id for p in standings]))

    def on_turn_advanced(self, player: Player) -> None:
        self.effects.append(Effect("turn", player=player.id))
