"""
orbito - Orbito board game engine

This package provides a two-player Orbito implementation: after every placement
the whole board orbits clockwise, ring by ring, before the win and draw checks
run. It includes the rotation engine, the game state, a Gymnasium environment
and a text-mode interface.
"""

# Version number
__version__ = '0.1.0'
