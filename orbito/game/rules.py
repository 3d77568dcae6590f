"""
rules.py - Gymnasium environment for Orbito

This module wraps Board in a gymnasium-compatible environment so agents and
scripts can drive a game through the standard reset/step interface. Actions
are flat cell indices: action a places a piece at (a // size, a % size).
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Optional, Tuple

from orbito.debug import debug, DebugLevel
from orbito.utils import BOARD_SIZE, ORBIT_STEPS_PER_TURN, GameResult
from orbito.game.board import Board


class OrbitoEnv(gym.Env):
    """
    Orbito environment following the Gymnasium interface.

    Both players act through the same env; rewards are given from player
    ONE's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 size: int = BOARD_SIZE, orbit_steps: int = ORBIT_STEPS_PER_TURN):
        """
        Initialize the Orbito environment.

        Args:
            render_mode: Mode for rendering the environment
            size: Board edge length
            orbit_steps: Clockwise ring steps applied after every move
        """
        debug.debug("Initializing OrbitoEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.board = Board(size, orbit_steps)
        self.size = size
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(size * size)
        # Cells hold 0 (empty), 1 (player one) or 2 (player two)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(size, size), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.board.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def action_to_cell(self, action: int) -> Tuple[int, int]:
        return divmod(int(action), self.size)

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by placing a piece.

        Args:
            action: Flat cell index in [0, size * size)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        if not self.action_space.contains(int(action)):
            outcome = self.board.play_at(-1, -1)
        else:
            outcome = self.board.play_at(*self.action_to_cell(action))

        if not outcome:
            debug.warning(f"Invalid action {action}: {outcome.error.name}", "env")
            info = self._get_info()
            info['invalid_move'] = outcome.error.name
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = outcome.result.is_game_over()
        if outcome.result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif outcome.result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif outcome.result == GameResult.DRAW:
            reward = self.reward_draw
        if terminated:
            debug.info(f"Game over: {outcome.result.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        """
        Render the current state of the environment.

        Returns:
            The board as text in "ascii" mode, otherwise None
        """
        if self.render_mode == "ascii":
            return f"{self.board.render()}\n{self.board.status()}"

        if self.render_mode == "human":
            print(self.board.render())
            print(self.board.status())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict:
        valid_moves = self.board.get_valid_moves()

        return {
            'valid_moves': valid_moves,
            'valid_actions': [r * self.size + c for r, c in valid_moves],
            'current_player': self.board.current_player.value,
            'game_result': self.board.game_result.name,
            'move_count': self.board.move_count,
            'winning_line': self.board.get_winning_line(),
            'last_move': self.board.last_move,
        }

    def close(self):
        """Clean up resources."""
        pass


if __name__ == "__main__":
    debug.configure(level=DebugLevel.INFO)

    env = OrbitoEnv(render_mode="human")
    observation, info = env.reset(seed=0)

    done = False
    while not done:
        action = env.np_random.choice(info['valid_actions'])
        observation, reward, terminated, truncated, info = env.step(action)
        done = terminated or truncated
        print(f"Action {action}: reward {reward}")
