"""Random world-space anchor points on ground cells."""

from typing import Iterator

import numpy as np

from .grid import Grid
from .types import VOID, WorldPoint


def sample_anchors(
    grid: Grid,
    luck: float,
    rng: np.random.Generator,
    cell_size: float = 1.0,
    ground_level: float = 0.0,
) -> Iterator[WorldPoint]:
    """Yield world positions of randomly chosen ground cells.

    Each ground cell is kept by an independent draw with probability
    `luck`. Every call draws afresh, so two calls differ in general.

    Args:
        grid: Finished grid.
        luck: Inclusion probability per ground cell, in [0, 1].
        rng: Random number generator.
        cell_size: World units per cell along x and z.
        ground_level: World height given to every anchor.

    Raises:
        ValueError: If luck is outside [0, 1].
    """
    if not 0.0 <= luck <= 1.0:
        raise ValueError(f"luck must be in [0, 1], got {luck}")

    for cell in grid:
        if cell.value == VOID:
            continue
        if rng.random() < luck:
            yield WorldPoint(x=cell.x * cell_size, y=ground_level, z=cell.y * cell_size)
