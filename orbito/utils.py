"""
utils.py - Utility functions and constants for the Orbito implementation

This module provides the configuration defaults, enumerations, result types and
board helpers (line enumeration, win/draw detection, ASCII rendering) used
throughout the package.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Game constants
BOARD_SIZE = 4
ORBIT_STEPS_PER_TURN = 1  # clockwise steps applied to every ring after each move

Coord = Tuple[int, int]


class UnsupportedSizeError(ValueError):
    """Raised when a board size has no ring decomposition (odd or < 2)."""

    def __init__(self, size, reason: str = "board size must be an even integer >= 2"):
        self.size = size
        super().__init__(f"Unsupported board size {size!r}: {reason}")


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """
    Enumeration representing the game outcome.

    The two win values carry the winning player, so a result is always exactly
    one of in-progress, won-by-a-player or draw.
    """
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        """The winning player, or None for in-progress and drawn games."""
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def won_by(cls, player: Player) -> 'GameResult':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        elif player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"No win result for {player!r}")


class MoveError(Enum):
    """Reasons a move is refused. All of them leave the game untouched."""
    GAME_OVER = auto()
    OUT_OF_BOUNDS = auto()
    CELL_OCCUPIED = auto()


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a play_at call. Truthy only when the move was accepted."""
    ok: bool
    result: GameResult
    error: Optional[MoveError] = None

    def __bool__(self) -> bool:
        return self.ok


def _is_index(value) -> bool:
    # bool is an int subclass but numpy would read it as a mask
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def is_valid_position(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        size: Board edge length

    Returns:
        True if position is valid, False otherwise
    """
    if not (_is_index(row) and _is_index(col)):
        return False
    return 0 <= row < size and 0 <= col < size


def get_lines(size: int) -> List[List[Coord]]:
    """
    Enumerate every winning line of a square board in scan order.

    Rows top to bottom, then columns left to right, then the main diagonal and
    finally the anti-diagonal. Win detection relies on this order to pick a
    single winner when a rotation completes lines for both players at once.
    """
    lines = [[(r, c) for c in range(size)] for r in range(size)]
    lines += [[(r, c) for r in range(size)] for c in range(size)]
    lines.append([(i, i) for i in range(size)])
    lines.append([(i, size - 1 - i) for i in range(size)])
    return lines


def find_winning_line(board: np.ndarray) -> Tuple[Player, List[Coord]]:
    """
    Find the first line fully owned by one player.

    Lines are visited in get_lines order and, within a line, Player.ONE is
    tested before Player.TWO.

    Returns:
        (winner, line) or (Player.EMPTY, []) when nobody has a full line
    """
    for line in get_lines(board.shape[0]):
        values = [board[r, c] for r, c in line]
        for player in (Player.ONE, Player.TWO):
            if all(v == player.value for v in values):
                return player, line
    return Player.EMPTY, []


def check_winner(board: np.ndarray) -> Player:
    """Return the winning player of a grid, or Player.EMPTY."""
    winner, _ = find_winning_line(board)
    return winner


def is_board_full(board: np.ndarray) -> bool:
    """True when no cell is empty."""
    return bool(np.all(board != Player.EMPTY.value))


def render_board_ascii(board: np.ndarray) -> str:
    """
    Render the board as ASCII art with row and column indices.

    Args:
        board: The game board

    Returns:
        ASCII representation of the board
    """
    size = board.shape[0]
    width = size * 2 - 1
    result = ["   " + " ".join(str(c) for c in range(size))]
    result.append("  +" + "-" * width + "+")

    for row in range(size):
        cells = " ".join(str(Player(int(board[row, col]))) for col in range(size))
        result.append(f"{row} |{cells}|")

    result.append("  +" + "-" * width + "+")
    return "\n".join(result)


def parse_position(position: str) -> np.ndarray:
    """
    Parse a comma-separated list of cell values into a square grid.

    Raises:
        ValueError: if a value is not 0, 1 or 2, or the count is not a square
    """
    values = [int(v) for v in position.split(',')]
    size = int(round(len(values) ** 0.5))
    if size * size != len(values) or size == 0:
        raise ValueError(f"Position must have a square number of values, got {len(values)}")
    valid = {p.value for p in Player}
    for v in values:
        if v not in valid:
            raise ValueError(f"Invalid cell value {v}; expected one of {sorted(valid)}")
    return np.array(values, dtype=int).reshape(size, size)
