"""Configuration errors raised while setting up a game."""

from __future__ import annotations


class GameConfigError(ValueError):
    """Base class for bad input supplied when a game is constructed."""


class InvalidRosterError(GameConfigError):
    """Wrong number of players, or a blank player name."""


class InvalidTopologyError(GameConfigError):
    """Snake/ladder mapping that breaks a board invariant."""
