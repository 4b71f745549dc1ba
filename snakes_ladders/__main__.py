"""CLI entry point: python -m snakes_ladders {play,simulate,chart,board}."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from snakes_ladders.board import BoardTopology, default_topology, load_topology
from snakes_ladders.chart import make_turns_chart
from snakes_ladders.dice import DieExhaustedError, RandomDie, ScriptedDie
from snakes_ladders.errors import GameConfigError
from snakes_ladders.game import EnginePhase, create_game
from snakes_ladders.players import MAX_PLAYERS, MIN_PLAYERS
from snakes_ladders.simulate import SimulationSummary, simulate
from snakes_ladders.terminal import TerminalPresentation, render_board


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _topology_from_args(args: argparse.Namespace) -> BoardTopology | None:
    """Board file wins; otherwise the default layout at --size (or None)."""
    if args.board:
        return load_topology(args.board)
    if args.size is not None:
        return default_topology(args.size)
    return None


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(2)


# ── play ─────────────────────────────────────────────────────────────

def cmd_play(args: argparse.Namespace) -> None:
    """Play one game in the terminal."""
    console = Console()
    ui = TerminalPresentation(console, pause_scale=0.0 if args.auto else 1.0)
    try:
        die = ScriptedDie(args.rolls) if args.rolls else RandomDie(args.seed)
        engine = create_game(
            args.names,
            topology=_topology_from_args(args),
            die=die,
            presentation=ui,
        )
    except ValueError as exc:  # bad roster, board or scripted rolls
        _fail(str(exc))

    console.print(render_board(engine.topology, engine.players))

    while not engine.ended:
        if not args.auto:
            console.input(f"[bold]{engine.current_player.name}[/bold], press Enter to roll ")
        try:
            engine.request_roll()
        except DieExhaustedError:
            console.print("[yellow]Out of scripted rolls, stopping.[/yellow]")
            break
        if engine.phase is EnginePhase.CELEBRATING:
            if not args.auto:
                console.input("Press Enter to continue ")
            engine.acknowledge()

    console.print(render_board(engine.topology, engine.players))


# ── simulate ─────────────────────────────────────────────────────────

def _run_simulation(args: argparse.Namespace) -> SimulationSummary:
    if not MIN_PLAYERS <= args.players <= MAX_PLAYERS:
        _fail(f"--players must be {MIN_PLAYERS}–{MAX_PLAYERS}")
    try:
        topology = _topology_from_args(args)
        if topology is not None:
            topology.validate()
    except GameConfigError as exc:
        _fail(str(exc))
    return simulate(
        args.games, players=args.players, seed=args.seed, topology=topology,
    )


def cmd_simulate(args: argparse.Namespace) -> None:
    """Play many headless games and print the statistics."""
    summary = _run_simulation(args)

    print(f"\n{summary.games} games, {summary.players} players")
    print("=" * 40)
    print(f"  Rolls per game      {summary.mean_turns:7.1f}  (min {summary.min_turns}, max {summary.max_turns})")
    print(f"  Snakes taken        {summary.snakes_hit:7d}")
    print(f"  Ladders climbed     {summary.ladders_hit:7d}")
    print(f"  Bounces             {summary.bounces:7d}")
    print(f"  Bonus turns         {summary.bonus_turns:7d}")
    if summary.unfinished:
        print(f"  Unfinished games    {summary.unfinished:7d}")
    print("\nWin rate by seat")
    for seat in range(summary.players):
        print(f"  Seat {seat + 1}  {summary.win_rate(seat) * 100:6.1f}%")


# ── chart ────────────────────────────────────────────────────────────

def cmd_chart(args: argparse.Namespace) -> None:
    """Simulate and save a chart of the results."""
    summary = _run_simulation(args)
    out = args.output or "game_lengths.png"
    make_turns_chart(summary, output_path=out)
    print(f"Chart saved to {out}")


# ── board ────────────────────────────────────────────────────────────

def cmd_board(args: argparse.Namespace) -> None:
    """Show the board, or dump it as JSON for editing."""
    try:
        topology = _topology_from_args(args) or default_topology()
        topology.validate()
    except GameConfigError as exc:
        _fail(str(exc))

    if args.json:
        print(json.dumps(topology.to_dict(), indent=2))
    else:
        Console().print(render_board(topology))


# ── main ─────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="snakes_ladders",
        description="Snakes & Ladders turn engine",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every engine step")
    sub = parser.add_subparsers(dest="command")

    board_opts = argparse.ArgumentParser(add_help=False)
    board_opts.add_argument("--board", help="JSON board file (size, snakes, ladders)")
    board_opts.add_argument("--size", type=int, help="Board size for the default layout")

    sim_opts = argparse.ArgumentParser(add_help=False)
    sim_opts.add_argument("--games", type=int, default=1000, help="Games to simulate (default 1000)")
    sim_opts.add_argument("--players", type=int, default=2, help="Seats per game (default 2)")
    sim_opts.add_argument("--seed", type=int, help="Random seed")

    p_play = sub.add_parser("play", parents=[board_opts], help="Play a game in the terminal")
    p_play.add_argument("names", nargs="+", help=f"{MIN_PLAYERS}–{MAX_PLAYERS} player names, in seating order")
    p_play.add_argument("--seed", type=int, help="Random seed")
    p_play.add_argument("--rolls", type=int, nargs="*", help="Replay a fixed sequence of die values")
    p_play.add_argument("--auto", action="store_true", help="Don't wait for Enter; no pauses")

    sub.add_parser("simulate", parents=[board_opts, sim_opts], help="Simulate many games")

    p_chart = sub.add_parser("chart", parents=[board_opts, sim_opts], help="Simulate and chart the results")
    p_chart.add_argument("--output", "-o", help="Output PNG path")

    p_board = sub.add_parser("board", parents=[board_opts], help="Show the board layout")
    p_board.add_argument("--json", action="store_true", help="Print the layout as JSON")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "chart":
        cmd_chart(args)
    elif args.command == "board":
        cmd_board(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
