"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator

import pytest

from molights.core.position import Position
from molights.game.state import GameState

PlayFn = Callable[..., GameState]


def _play(game: GameState, *sans: str) -> GameState:
    for token in sans:
        move = game.parse_san(token)
        assert move is not None, f"no legal move for {token!r}"
        game.apply_move(move)
    return game


@pytest.fixture
def play() -> PlayFn:
    """Apply SAN tokens to a game in order, failing on an unmatched token."""
    return _play


@pytest.fixture
def game() -> GameState:
    return GameState()


@pytest.fixture
def start() -> Position:
    return Position.initial()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment with every ``MOLIGHTS_*`` variable removed."""
    for key in list(os.environ):
        if key.startswith("MOLIGHTS_"):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers the CLI installs so streams do not leak between tests."""
    logger = logging.getLogger("molights")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
