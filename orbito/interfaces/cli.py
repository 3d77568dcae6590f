"""
cli.py - Command-line interface for Orbito

This module provides a CLI for playing hot-seat games in the terminal,
analyzing board positions, and benchmarking the rotation engine.
"""

import argparse
import random
import sys
from typing import List, Optional, Tuple, Union

from orbito.debug import debug, DebugLevel
from orbito.utils import (BOARD_SIZE, ORBIT_STEPS_PER_TURN, UnsupportedSizeError,
                          find_winning_line, is_board_full, parse_position,
                          render_board_ascii)
from orbito.game.board import Board
from orbito.game.rotation import rotate

QUIT = 'quit'
RESTART = 'restart'

MOVE_ERROR_MESSAGES = {
    'GAME_OVER': "The game is over. Press 'r' to restart.",
    'OUT_OF_BOUNDS': "That cell is off the board.",
    'CELL_OCCUPIED': "That cell is already taken.",
}


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class SimpleCLI:
    """Simple command-line interface for Orbito."""

    def __init__(self, input_func=input):
        """Initialize the CLI."""
        self.input = input_func
        self.board: Optional[Board] = None
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Orbito CLI')
        parser.add_argument('--debug-level', default='info',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a hot-seat game')
        play_parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        play_parser.add_argument('--size', type=int, default=BOARD_SIZE, help='Board size (even, >= 2)')
        play_parser.add_argument('--steps', type=int, default=ORBIT_STEPS_PER_TURN,
                                 help='Clockwise orbit steps after each move')

        test_parser = subparsers.add_parser('test', help='Analyze a board position')
        test_parser.add_argument('--position', type=str,
                                 help='Comma-separated cell values (0 empty, 1, 2), row by row')
        test_parser.add_argument('--steps', type=int, default=ORBIT_STEPS_PER_TURN,
                                 help='Orbit steps used for the preview')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--size', type=int, default=BOARD_SIZE, help='Board size (even, >= 2)')

        self.args = parser.parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments and return an exit code."""
        if not self.args:
            self.parse_args(argv)

        try:
            if self.args.command == 'play':
                self.play_game()
            elif self.args.command == 'test':
                return self.test_position()
            elif self.args.command == 'benchmark':
                self.benchmark()
            else:
                print("Please specify a command. Use --help for options.")
                return 1
        except UnsupportedSizeError as e:
            debug.error(str(e), "cli")
            print(f"Configuration error: {e}")
            return 2
        return 0

    def play_game(self) -> None:
        """Play an Orbito game with two players sharing the terminal."""
        self.board = Board(self.args.size, self.args.steps)
        size = self.board.size
        print("Starting a new Orbito game!")
        print(f"Enter 'row col' (0-{size - 1}) to place a piece. "
              "After every move the board orbits clockwise.")
        print("Other commands: 'q' to quit, 'r' to restart.")
        print(self.board.render())

        while True:
            print(self.board.status())
            if self.board.game_result.is_game_over():
                line = self.board.get_winning_line()
                if line:
                    print(f"Winning line: {line}")
                if self.ask_play_again():
                    self.board.reset()
                    print("Game restarted.")
                    print(self.board.render())
                    continue
                return

            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == RESTART:
                self.board.reset()
                print("Game restarted.")
                print(self.board.render())
                continue

            outcome = self.board.play_at(*move)
            if outcome:
                print(self.board.render())
            else:
                print(MOVE_ERROR_MESSAGES[outcome.error.name])

    def ask_play_again(self) -> bool:
        """Ask until the player answers r (restart) or q (quit)."""
        while True:
            command = self.get_human_move(prompt="Play again? (r/q): ")
            if command == RESTART:
                return True
            if command == QUIT:
                return False
            if command is not None:
                print("The game is over. Enter 'r' to restart or 'q' to quit.")

    def get_human_move(self, prompt: Optional[str] = None) -> Union[Tuple[int, int], str, None]:
        """
        Read one command from the player.

        Returns:
            (row, col), QUIT, RESTART, or None for unreadable input
        """
        if prompt is None:
            prompt = f"Player {self.board.current_player} move (row col, q/r): "
        try:
            user_input = self.input(prompt).strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        elif user_input == 'r':
            return RESTART

        parts = user_input.replace(',', ' ').split()
        if len(parts) != 2:
            print("Invalid input. Enter a row and a column, e.g. '0 3'.")
            return None
        try:
            return int(parts[0]), int(parts[1])
        except ValueError:
            print("Invalid input. Row and column must be numbers.")
            return None

    def test_position(self) -> int:
        """Analyze a position given with --position."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return 1

        try:
            grid = parse_position(self.args.position)
            rotated = rotate(grid, self.args.steps)
        except ValueError as e:
            # UnsupportedSizeError is a ValueError too
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(render_board_ascii(grid))
        self._report(grid)

        print(f"\nAfter orbiting {self.args.steps} step(s):")
        print(render_board_ascii(rotated))
        self._report(rotated)
        return 0

    def _report(self, grid) -> None:
        winner, line = find_winning_line(grid)
        if line:
            print(f"Win for {winner} on {line}")
        else:
            print("No win detected for any player")

        if is_board_full(grid):
            print("Board is full")
        else:
            print(f"Empty spaces: {int((grid == 0).sum())}")

    def benchmark(self) -> None:
        """Benchmark rotation, move making and full random games."""
        iterations = self.args.iterations
        size = self.args.size
        print(f"Running benchmark with {iterations} iterations on a {size}x{size} board...")

        board = Board(size)
        debug.start_timer("rotation")
        for _ in range(iterations):
            rotate(board.grid, 1, board.rings)
        rotation_time = debug.end_timer("rotation")
        print(f"Rotations: {rotation_time:.6f} seconds total, "
              f"{rotation_time / iterations * 1000:.6f} ms per rotation")

        debug.start_timer("game_simulation")
        games_played = 0
        total_moves = 0
        for _ in range(max(1, iterations // 10)):
            board.reset()
            while not board.game_result.is_game_over():
                board.play_at(*random.choice(board.get_valid_moves()))
                total_moves += 1
            games_played += 1
        simulation_time = debug.end_timer("game_simulation")
        print(f"Played {games_played} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games_played * 1000:.6f} ms per game, "
              f"{simulation_time / total_moves * 1000:.6f} ms per move")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
