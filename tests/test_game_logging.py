"""Tests that the engine's game log and logger capture what happened."""

import logging

from snakes_ladders.board import BoardTopology
from snakes_ladders.dice import ScriptedDie
from snakes_ladders.game import create_game
from snakes_ladders.presentation import (
    NullPresentation,
    PresentationPort,
    RecordingPresentation,
)


def _engine(rolls, topology=None, presentation=None):
    return create_game(
        ["Alice", "Bob"],
        topology=topology or BoardTopology(size=100, snakes={10: 3}, ladders={5: 20}),
        die=ScriptedDie(rolls),
        presentation=presentation,
    )


def test_turn_result_captures_transport():
    engine = _engine([4])
    result = engine.request_roll()

    entry = engine.history[0]
    assert entry is result
    assert entry.start_position == 1
    assert entry.landing == 5
    assert entry.final_position == 20
    assert entry.transport_kind == "ladder"
    assert entry.transport_dest == 20


def test_turn_result_defaults_for_plain_move():
    engine = _engine([2])
    entry = engine.request_roll()
    assert entry.transport_kind is None
    assert entry.transport_dest is None
    assert entry.finished is False
    assert entry.rank is None
    assert entry.outcome == "normal"


def test_recording_presentation_keeps_order():
    ui = RecordingPresentation()
    engine = _engine([4, 2], presentation=ui)
    engine.request_roll()
    engine.request_roll()

    assert ui.kinds() == [
        "roll", "step", "step", "step", "step", "pause", "transport", "turn",
        "roll", "step", "step", "turn",
    ]
    assert [e.player for e in ui.of_kind("roll")] == [0, 1]
    assert [e.value for e in ui.of_kind("roll")] == [4, 2]

    ui.clear()
    assert ui.effects == []


def test_presentations_satisfy_port_protocol():
    assert isinstance(NullPresentation(), PresentationPort)
    assert isinstance(RecordingPresentation(), PresentationPort)


def test_engine_logs_moves_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="snakes_ladders.game")
    engine = _engine([4])
    engine.request_roll()

    messages = [r.getMessage() for r in caplog.records]
    assert "Alice rolls 4 from 1" in messages
    assert "Alice takes the ladder 5 → 20" in messages


def test_engine_logs_game_over_at_info(caplog):
    caplog.set_level(logging.INFO, logger="snakes_ladders.game")
    engine = _engine([4], topology=BoardTopology(size=100))
    engine.players[0].advance_to(96)
    engine.request_roll()

    infos = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert any(m.startswith("Game over after 1 turns: 1. Alice, 2. Bob") for m in infos)


def test_ignored_roll_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="snakes_ladders.game")
    engine = _engine([4], topology=BoardTopology(size=100))
    engine.players[0].advance_to(96)
    engine.request_roll()
    caplog.clear()

    assert engine.request_roll() is None
    assert "Roll ignored (phase=game_over)" in [r.getMessage() for r in caplog.records]
