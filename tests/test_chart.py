"""Tests for snakes_ladders.chart."""

from snakes_ladders.chart import make_turns_chart
from snakes_ladders.simulate import simulate


def test_make_turns_chart_writes_png(tmp_path):
    summary = simulate(25, players=3, seed=2)
    out = tmp_path / "lengths.png"

    path = make_turns_chart(summary, output_path=str(out))

    assert path == str(out)
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
