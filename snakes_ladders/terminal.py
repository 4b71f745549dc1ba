"""Terminal front end: a PresentationPort that draws with rich."""

from __future__ import annotations

import math
import time
from typing import Iterable, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from snakes_ladders.board import BoardTopology, cell_to_grid

BOARD_COLUMNS = 10


def render_board(topology: BoardTopology, players: Iterable = ()) -> Table:
    """Serpentine grid with snake/ladder markers and seat numbers on tokens.

    *players* may be :class:`Player` objects or snapshot ``PlayerView`` rows.
    """
    rows = math.ceil(topology.size / BOARD_COLUMNS)
    grid = [[""] * BOARD_COLUMNS for _ in range(rows)]

    tokens: dict[int, list[str]] = {}
    for p in players:
        tokens.setdefault(p.position, []).append(str(p.id + 1))

    for cell in range(1, topology.size + 1):
        row, col = cell_to_grid(cell, topology.size, BOARD_COLUMNS)
        text = f"[dim]{cell}[/dim]"
        dest = topology.transport_from(cell)
        if topology.is_snake(cell):
            text += f" [red]↓{dest}[/red]"
        elif topology.is_ladder(cell):
            text += f" [green]↑{dest}[/green]"
        if cell in tokens:
            text += "\n[bold reverse]" + " ".join(tokens[cell]) + "[/bold reverse]"
        grid[row][col] = text

    table = Table(show_header=False, show_lines=True, box=box.SQUARE, padding=(0, 1))
    for _ in range(BOARD_COLUMNS):
        table.add_column(justify="center", min_width=4)
    for row in grid:
        table.add_row(*row)
    return table


def standings_table(standings: Sequence) -> Table:
    table = Table(title="Final standings", box=box.SIMPLE_HEAVY)
    table.add_column("Rank", justify="right")
    table.add_column("Player")
    table.add_column("Cell", justify="right")
    for p in standings:
        table.add_row(str(p.rank) if p.rank else "-", p.name, str(p.position))
    return table


class TerminalPresentation:
    """Prints each effect; unit steps are folded into one line per run.

    *pause_scale* multiplies the engine's requested pauses (0 disables them).
    """

    def __init__(self, console: Console | None = None, pause_scale: float = 0.0):
        self.console = console or Console()
        self.pause_scale = pause_scale
        self._walker = None
        self._path: list[int] = []

    def _flush(self) -> None:
        if len(self._path) > 1:
            verb = "bounces back" if self._path[-1] < self._path[0] else "moves"
            self.console.print(
                f"  {self._walker.name} {verb} {self._path[0]} → {self._path[-1]}"
            )
        self._walker = None
        self._path = []

    def on_roll(self, player, value):
        self._flush()
        self.console.print(f"[bold]{player.name}[/bold] rolls a [bold cyan]{value}[/bold cyan]")

    def on_step(self, player, from_cell, to_cell):
        if not self._path:
            self._walker = player
            self._path = [from_cell]
        self._path.append(to_cell)

    def on_pause(self, milliseconds):
        self._flush()
        if self.pause_scale > 0:
            time.sleep(milliseconds / 1000 * self.pause_scale)

    def on_transport(self, player, from_cell, to_cell, kind):
        self._flush()
        if kind == "snake":
            self.console.print(f"  [red]Snake![/red] {player.name} slides {from_cell} → {to_cell}")
        else:
            self.console.print(f"  [green]Ladder![/green] {player.name} climbs {from_cell} → {to_cell}")

    def on_player_finished(self, player, rank, decisive):
        self._flush()
        self.console.print(
            f"[bold yellow]{player.name} reaches the top and takes place {rank}![/bold yellow]"
        )

    def on_game_over(self, standings):
        self._flush()
        self.console.print(standings_table(standings))

    def on_turn_advanced(self, player):
        self._flush()
        self.console.print(f"[dim]{player.name} to roll.[/dim]")
