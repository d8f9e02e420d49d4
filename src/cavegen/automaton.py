"""Cellular automaton: random seeding, smoothing steps and cost annotation.

The smoothing rule looks only at the previous generation's neighbourhood:
a cell whose 8-neighbourhood holds more than four void (or out-of-range)
cells becomes void, every other cell becomes ground. The cell's own state
does not enter the rule.
"""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from .config import CaveConfig
from .grid import Grid
from .types import GROUND, VOID

# 8-connected, exclude center
NEIGHBOUR_KERNEL = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int32)

VOID_NEIGHBOUR_LIMIT = 4


def seed_grid(
    width: int,
    height: int,
    config: CaveConfig,
    rng: np.random.Generator,
) -> Grid:
    """Create the initial random grid.

    Cells inside the border margin are void; every other cell is ground
    with probability `config.chance_to_start_alive`.

    Args:
        width: Grid width.
        height: Grid height.
        config: Generation configuration.
        rng: Random number generator.

    Returns:
        Freshly seeded grid.
    """
    alive = rng.random((height, width)) < config.chance_to_start_alive
    cells = np.where(alive, GROUND, VOID).astype(np.uint8)

    border = config.border_width
    if border > 0:
        cells[:border, :] = VOID
        cells[-border:, :] = VOID
        cells[:, :border] = VOID
        cells[:, -border:] = VOID

    return Grid.from_array(cells)


def count_void_neighbours(cells: NDArray[np.uint8]) -> NDArray[np.int32]:
    """Count void neighbours of every cell, out-of-range cells counting as void."""
    void = (cells == VOID).astype(np.int32)
    return ndimage.convolve(void, NEIGHBOUR_KERNEL, mode="constant", cval=1)


def count_solid_neighbours(cells: NDArray[np.uint8]) -> NDArray[np.int32]:
    """Count ground neighbours of every cell, out-of-range cells counting as ground."""
    ground = (cells != VOID).astype(np.int32)
    return ndimage.convolve(ground, NEIGHBOUR_KERNEL, mode="constant", cval=1)


def simulation_step(grid: Grid) -> Grid:
    """Compute the next generation into a new grid."""
    void_count = count_void_neighbours(grid.cells)
    cells = np.where(void_count > VOID_NEIGHBOUR_LIMIT, VOID, GROUND).astype(np.uint8)
    return Grid.from_array(cells)


def run_simulation(grid: Grid, steps: int) -> Grid:
    """Apply `steps` smoothing iterations, returning the final generation."""
    for _ in range(steps):
        grid = simulation_step(grid)
    return grid


def fill_enclosed_void(grid: Grid) -> int:
    """Turn void cells without any void neighbour into ground.

    Returns:
        Number of cells filled.
    """
    enclosed = (grid.cells == VOID) & (count_solid_neighbours(grid.cells) == 8)
    grid.cells[enclosed] = GROUND
    return int(np.sum(enclosed))


def apply_neighbour_cost(grid: Grid) -> None:
    """Replace each ground cell by its neighbour cost.

    The cost is the number of ground or out-of-range cells around it,
    floored at 1 so a ground cell never reads as void. Void stays 0.
    """
    ground = grid.cells != VOID
    cost = np.maximum(count_solid_neighbours(grid.cells), 1)
    grid.cells = np.where(ground, cost, VOID).astype(np.uint8)
