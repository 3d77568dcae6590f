"""
board.py - Board representation and turn sequencing for Orbito

This module implements the Board class, which owns the grid and the turn state.
A turn places the current player's piece on an empty cell, orbits the whole
board, then checks for a win or a draw before handing the turn over.
"""

import numpy as np
from typing import List, Optional, Tuple

from orbito.debug import debug, DebugLevel
from orbito.game.rotation import rings_for, rotate
from orbito.utils import (BOARD_SIZE, ORBIT_STEPS_PER_TURN, Coord, Player, GameResult,
                          MoveError, MoveResult, find_winning_line, is_board_full,
                          is_valid_position, render_board_ascii)


class Board:
    """
    Represents an Orbito game in progress.

    The board is the single owner of the grid, the player to move and the game
    result. play_at is the only way to change them apart from reset, and a
    finished game stays finished until reset is called.
    """

    def __init__(self, size: int = BOARD_SIZE, orbit_steps: int = ORBIT_STEPS_PER_TURN):
        """
        Initialize an empty board.

        Args:
            size: Edge length, an even integer >= 2
            orbit_steps: Clockwise ring steps applied after every move

        Raises:
            UnsupportedSizeError: if size has no ring decomposition
        """
        debug.debug(f"Initializing new {size}x{size} Board", "board")
        self.rings = rings_for(size)
        self.size = size
        self.orbit_steps = int(orbit_steps)
        self.reset()

    def reset(self):
        """Reset the board to an empty state, keeping this instance."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((self.size, self.size), dtype=int)
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.move_count = 0
        self.last_move: Optional[Coord] = None
        self.last_orbit: Optional[np.ndarray] = None

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board(self.size, self.orbit_steps)
        new_board.grid = self.grid.copy()
        new_board.current_player = self.current_player
        new_board.game_result = self.game_result
        new_board.move_count = self.move_count
        new_board.last_move = self.last_move
        new_board.last_orbit = None if self.last_orbit is None else self.last_orbit.copy()
        return new_board

    def validate_move(self, row: int, col: int) -> Optional[MoveError]:
        """
        Check the move preconditions in order.

        Returns:
            The first failing precondition, or None if the move is legal
        """
        if self.game_result.is_game_over():
            return MoveError.GAME_OVER
        if not is_valid_position(row, col, self.size):
            return MoveError.OUT_OF_BOUNDS
        if self.grid[row, col] != Player.EMPTY.value:
            return MoveError.CELL_OCCUPIED
        return None

    def is_valid_move(self, row: int, col: int) -> bool:
        return self.validate_move(row, col) is None

    def get_valid_moves(self) -> List[Coord]:
        """
        Get the empty cells a piece can be placed on.

        Returns:
            List of (row, col) positions in row-major order
        """
        if self.game_result.is_game_over():
            return []

        rows, cols = np.nonzero(self.grid == Player.EMPTY.value)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def play_at(self, row: int, col: int) -> MoveResult:
        """
        Place the current player's piece, orbit the board and resolve the turn.

        Nothing changes when the move is refused.

        Args:
            row: Row index (0-indexed)
            col: Column index (0-indexed)

        Returns:
            MoveResult with the resulting GameResult, or the MoveError that
            refused the move
        """
        debug.debug(f"Attempting move at ({row}, {col}) for player {self.current_player.name}", "board")

        error = self.validate_move(row, col)
        if error is not None:
            debug.debug(f"Invalid move at ({row}, {col}): {error.name}", "board")
            return MoveResult(ok=False, result=self.game_result, error=error)

        placed = self.grid.copy()
        placed[row, col] = self.current_player.value
        orbited = rotate(placed, self.orbit_steps, self.rings)

        self.grid = orbited
        self.last_move = (row, col)
        self.last_orbit = orbited.copy()
        self.move_count += 1

        with debug.timer("win_check", "board"):
            self.game_result = self._evaluate()

        if self.game_result.is_game_over():
            if self.game_result == GameResult.DRAW:
                debug.info("Game ends in a draw", "board")
            else:
                debug.info(f"Player {self.game_result.winner.name} wins after move at {self.last_move}", "board")
        else:
            self.current_player = self.current_player.other()
            debug.debug(f"Switching to player {self.current_player.name}", "board")

        return MoveResult(ok=True, result=self.game_result)

    def _evaluate(self) -> GameResult:
        winner, _ = find_winning_line(self.grid)
        if winner != Player.EMPTY:
            return GameResult.won_by(winner)
        if is_board_full(self.grid):
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions forming the winning line, or empty list if no win
        """
        if self.game_result.winner is None:
            return []

        _, line = find_winning_line(self.grid)
        return line

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid; changing it does not affect the board
        """
        return self.grid.copy()

    def cell(self, row: int, col: int) -> Player:
        return Player(int(self.grid[row, col]))

    def status(self) -> str:
        """One-line description of whose turn it is or how the game ended."""
        if self.game_result == GameResult.DRAW:
            return "Draw!"
        if self.game_result.winner is not None:
            return f"Player {self.game_result.winner} wins!"
        return f"Player {self.current_player} to move"

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()


if __name__ == "__main__":
    debug.configure(level=DebugLevel.DEBUG)

    board = Board()
    print(board)

    for row, col in [(3, 1), (1, 1), (3, 0), (1, 1), (2, 0), (1, 2), (1, 0)]:
        print(f"\nPlaying ({row}, {col}) as {board.current_player}")
        outcome = board.play_at(row, col)
        print(board)
        print(board.status() if outcome else f"Refused: {outcome.error.name}")

    print(f"\nWinning line: {board.get_winning_line()}")
