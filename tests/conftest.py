"""Shared fixtures for the Orbito test suite."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from orbito.debug import debug, DebugLevel
from orbito.game.board import Board


# (row, col) moves that leave player ONE owning the whole top row after the
# seventh orbit, with player TWO parking pieces in the centre ring.
TOP_ROW_WIN_MOVES = [(3, 1), (1, 1), (3, 0), (1, 1), (2, 0), (1, 2), (1, 0)]

# A full 4x4 grid in which every row, column and diagonal is mixed.
DRAW_PATTERN = np.array([
    [1, 1, 2, 2],
    [2, 2, 1, 1],
    [1, 1, 2, 2],
    [2, 2, 1, 1],
])


@pytest.fixture(autouse=True)
def _quiet_debug():
    """Keep log output down and undo any level changes made by a test."""

    debug.configure(level=DebugLevel.WARNING, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, components=[])


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def won_board() -> Board:
    board = Board()
    for row, col in TOP_ROW_WIN_MOVES:
        assert board.play_at(row, col)
    return board
