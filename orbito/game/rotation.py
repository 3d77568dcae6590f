"""
rotation.py - Ring decomposition and orbit rotation for the Orbito board

A square board of even size N splits into N/2 concentric rings. Each ring is
listed clockwise starting at its top-left corner: along the top row to the
right, down the right column, back along the bottom row and up the left
column. Orbiting the board shifts every ring's contents forward along that
order, so a piece at traversal position i ends up at (i + steps) mod L.

All functions here are pure: they never modify the grid they are given.
"""

from functools import lru_cache
from typing import Sequence, Tuple

import numpy as np

from orbito.debug import debug
from orbito.utils import Coord, UnsupportedSizeError

RingSpec = Tuple[Coord, ...]


def _ring_coords(size: int, layer: int) -> RingSpec:
    lo, hi = layer, size - 1 - layer
    coords = [(lo, c) for c in range(lo, hi + 1)]
    coords += [(r, hi) for r in range(lo + 1, hi)]
    coords += [(hi, c) for c in range(hi, lo - 1, -1)]
    coords += [(r, lo) for r in range(hi - 1, lo, -1)]
    return tuple(coords)


@lru_cache(maxsize=None)
def _rings(size: int) -> Tuple[RingSpec, ...]:
    debug.debug(f"Building ring decomposition for {size}x{size} board", "rotation")
    return tuple(_ring_coords(size, layer) for layer in range(size // 2))


def rings_for(size: int) -> Tuple[RingSpec, ...]:
    """
    Return the rings of a size x size board, outermost first.

    Every cell belongs to exactly one ring. For a 4x4 board this is the
    12-cell boundary starting at (0, 0) and the 2x2 centre
    (1, 1), (1, 2), (2, 2), (2, 1).

    Raises:
        UnsupportedSizeError: if size is not an even integer >= 2
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise UnsupportedSizeError(size, "board size must be an integer")
    if size < 2:
        raise UnsupportedSizeError(size, "board size must be at least 2")
    if size % 2:
        raise UnsupportedSizeError(size, "odd board sizes have no ring decomposition")
    return _rings(int(size))


def rotate_ring(grid: np.ndarray, ring: Sequence[Coord], steps: int) -> np.ndarray:
    """
    Rotate the values of one ring clockwise by steps positions.

    Args:
        grid: The board to read from (left untouched)
        ring: Ring coordinates in clockwise traversal order
        steps: Any integer; negative values rotate counter-clockwise

    Returns:
        A new grid with the ring rotated
    """
    result = np.array(grid, copy=True)
    if not ring:
        return result

    rows, cols = zip(*ring)
    values = result[rows, cols]
    # np.roll puts values[i] at (i + shift) mod L
    result[rows, cols] = np.roll(values, steps % len(ring))
    return result


def rotate(grid: np.ndarray, steps: int = 1, rings: Sequence[RingSpec] = None) -> np.ndarray:
    """
    Orbit every ring of the grid clockwise by steps positions.

    Args:
        grid: Square board to rotate (left untouched)
        steps: Number of clockwise steps, any integer
        rings: Rings to rotate; defaults to rings_for(grid size). Cells
            outside every ring keep their value.

    Returns:
        The rotated board as a new array

    Raises:
        UnsupportedSizeError: if the grid is not square or has no decomposition
    """
    grid = np.asarray(grid)
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        raise UnsupportedSizeError(grid.shape, "board must be a square grid")

    if rings is None:
        rings = rings_for(grid.shape[0])

    debug.trace(f"Rotating {len(rings)} ring(s) by {steps} step(s)", "rotation")
    result = np.array(grid, copy=True)
    for ring in rings:
        result = rotate_ring(result, ring, steps)
    return result
