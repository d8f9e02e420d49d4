"""Region extraction by flood fill, and small-region pruning."""

from collections import deque
from typing import Iterator

import numpy as np
import structlog

from .grid import Grid
from .types import GROUND, VOID, Coord

logger = structlog.get_logger()

Region = list[Coord]


def region_tiles(
    grid: Grid,
    start_x: int,
    start_y: int,
    visited: np.ndarray,
) -> Region:
    """Breadth-first fill of the orthogonal component containing (start_x, start_y).

    Cells are marked in `visited` when enqueued, so no cell is queued twice.
    Diagonal cells of the 3x3 window are never followed.

    Args:
        grid: Grid to read.
        start_x: Seed column.
        start_y: Seed row.
        visited: Boolean (height, width) shadow grid, updated in place.

    Returns:
        Tiles of the region in discovery order.
    """
    target = grid.get(start_x, start_y)
    tiles: Region = []
    queue: deque[tuple[int, int]] = deque([(start_x, start_y)])
    visited[start_y, start_x] = True

    while queue:
        x, y = queue.popleft()
        tiles.append(Coord(x=x, y=y))

        for cell in grid.neighbourhood(x, y):
            if cell.x != x and cell.y != y:
                continue
            if visited[cell.y, cell.x] or cell.value != target:
                continue
            visited[cell.y, cell.x] = True
            queue.append((cell.x, cell.y))

    return tiles


def extract_regions(grid: Grid, value: int) -> Iterator[Region]:
    """Yield every maximal orthogonally-connected region holding `value`.

    Seeds are taken in the grid's row-major scan order, so region order
    is fixed for a given grid. The grid must not change while iterating.
    """
    visited = np.zeros((grid.height, grid.width), dtype=bool)

    for cell in grid:
        if cell.value == value and not visited[cell.y, cell.x]:
            yield region_tiles(grid, cell.x, cell.y, visited)


def touches_edge(grid: Grid, region: Region) -> bool:
    """Whether any tile of the region lies on the outer ring of the grid."""
    return any(
        tile.x == 0
        or tile.y == 0
        or tile.x == grid.width - 1
        or tile.y == grid.height - 1
        for tile in region
    )


def prune_regions(
    grid: Grid,
    value: int,
    threshold: int,
    replacement: int,
    keep_edge_regions: bool = False,
) -> list[Region]:
    """Reclassify regions smaller than `threshold` to `replacement`.

    Args:
        grid: Grid to prune in place.
        value: Classification of the regions to examine.
        threshold: Minimum size a region needs to survive.
        replacement: Value written over undersized regions.
        keep_edge_regions: Leave regions touching the grid edge untouched.

    Returns:
        Surviving regions, in scan order.
    """
    survivors: list[Region] = []
    removed = 0

    for region in list(extract_regions(grid, value)):
        if len(region) >= threshold or (keep_edge_regions and touches_edge(grid, region)):
            survivors.append(region)
        else:
            grid.flag(region, replacement)
            removed += 1

    logger.debug(
        "regions_pruned",
        value=value,
        threshold=threshold,
        removed=removed,
        kept=len(survivors),
    )
    return survivors


def prune_map(
    grid: Grid,
    ground_threshold: int,
    void_threshold: int,
    preserve_edge_void: bool = True,
) -> list[Region]:
    """Erase small ground islands, then fill small void pockets.

    Returns:
        Ground regions that survived, recomputed after void filling so
        that regions merged by a filled pocket come back as one.
    """
    prune_regions(grid, GROUND, ground_threshold, VOID)
    prune_regions(
        grid, VOID, void_threshold, GROUND, keep_edge_regions=preserve_edge_void
    )
    return list(extract_regions(grid, GROUND))
