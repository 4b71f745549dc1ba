"""Charts of simulated game lengths and per-seat win rates."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt

from snakes_ladders.simulate import SimulationSummary


def make_turns_chart(
    summary: SimulationSummary,
    output_path: str = "game_lengths.png",
    title: str = "Snakes & Ladders: simulated games",
) -> str:
    """Histogram of rolls per game beside a bar chart of seat win rates.

    Returns the path to the saved PNG.
    """
    fig, (ax_hist, ax_seats) = plt.subplots(
        1, 2, figsize=(12, 4.5), gridspec_kw={"width_ratios": [2, 1]},
    )

    bins = min(40, max(5, len(set(summary.turns))))
    ax_hist.hist(summary.turns, bins=bins, color="#4A90D9", edgecolor="white")
    ax_hist.axvline(summary.mean_turns, color="#E4572E", linestyle="--", linewidth=1.5)
    ax_hist.text(
        summary.mean_turns, ax_hist.get_ylim()[1] * 0.95,
        f" mean {summary.mean_turns:.1f}",
        color="#E4572E", va="top", fontsize=10, fontweight="bold",
    )
    ax_hist.set_xlabel("Rolls per game")
    ax_hist.set_ylabel("Games")

    seats = [f"Seat {i + 1}" for i in range(summary.players)]
    rates = [summary.win_rate(i) * 100 for i in range(summary.players)]
    bars = ax_seats.bar(seats, rates, color="#59A96A", edgecolor="white")

    # Annotate bars with win percentages
    for bar, rate in zip(bars, rates):
        ax_seats.text(
            bar.get_x() + bar.get_width() / 2, bar.get_height() + 0.5,
            f"{rate:.1f}%",
            ha="center", fontsize=10, fontweight="bold",
        )
    ax_seats.set_ylabel("Wins (%)")
    ax_seats.set_ylim(0, max(rates, default=0) + 10)

    fig.suptitle(f"{title} ({summary.games} games)", fontsize=14, fontweight="bold")
    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
