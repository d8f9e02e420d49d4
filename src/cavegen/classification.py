"""Neighbour-cost tiers for finished grids."""

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from .grid import Grid

MAX_COST = 8


class CellKind(IntEnum):
    """Semantic tier of a finished cell."""

    VOID = 0
    BORDER = 1
    CORE = 2


def classify_cost(cost: int, border_cost_max: int = 7) -> CellKind:
    """Tier of a single neighbour cost value."""
    if cost == 0:
        return CellKind.VOID
    if cost <= border_cost_max:
        return CellKind.BORDER
    return CellKind.CORE


def classify_costs(grid: Grid, border_cost_max: int = 7) -> NDArray[np.uint8]:
    """Map every cell of a cost-annotated grid to its CellKind value.

    Args:
        grid: Grid whose ground cells hold neighbour costs.
        border_cost_max: Highest cost still counted as border.

    Returns:
        (height, width) array of CellKind values.
    """
    kinds = np.full(grid.cells.shape, CellKind.CORE, dtype=np.uint8)
    kinds[grid.cells <= border_cost_max] = CellKind.BORDER
    kinds[grid.cells == 0] = CellKind.VOID
    return kinds


def tier_counts(grid: Grid, border_cost_max: int = 7) -> dict[CellKind, int]:
    """Number of cells in each tier."""
    kinds = classify_costs(grid, border_cost_max)
    return {kind: int(np.sum(kinds == kind)) for kind in CellKind}
