"""
orbito.game - Core game mechanics for Orbito

This package contains the ring rotation engine, the board/turn state and the
Gymnasium environment built on top of them.
"""

from orbito.game.rotation import rings_for, rotate, rotate_ring
from orbito.game.board import Board
from orbito.game.rules import OrbitoEnv

__all__ = ['rings_for', 'rotate', 'rotate_ring', 'Board', 'OrbitoEnv']
