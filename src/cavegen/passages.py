"""Passage carving: digital line between two tiles, widened by disk stamps."""

from .grid import Grid
from .types import GROUND, Coord


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def get_line(start: Coord, end: Coord) -> list[Coord]:
    """Rasterize the segment from `start` to `end`, both endpoints included.

    Steps one unit along the dominant axis per tile and moves the minor
    axis whenever the accumulated error reaches the dominant span. Step
    directions come from the delta signs, so every octant is handled.
    """
    x, y = start.x, start.y
    dx = end.x - start.x
    dy = end.y - start.y

    inverted = False
    step = _sign(dx)
    gradient_step = _sign(dy)
    longest = abs(dx)
    shortest = abs(dy)

    if longest < shortest:
        inverted = True
        longest, shortest = shortest, longest
        step, gradient_step = gradient_step, step

    line: list[Coord] = []
    gradient_accumulation = longest // 2

    for _ in range(longest):
        line.append(Coord(x=x, y=y))

        if inverted:
            y += step
        else:
            x += step

        gradient_accumulation += shortest
        if gradient_accumulation >= longest:
            if inverted:
                x += gradient_step
            else:
                y += gradient_step
            gradient_accumulation -= longest

    line.append(Coord(x=x, y=y))
    return line


def stamp_disk(grid: Grid, centre: Coord, radius: int, value: int = GROUND) -> None:
    """Write `value` to every in-range cell within `radius` of `centre`."""
    r_squared = radius * radius
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if dx * dx + dy * dy <= r_squared:
                grid.set(centre.x + dx, centre.y + dy, value)


def carve_passage(grid: Grid, start: Coord, end: Coord, radius: int) -> list[Coord]:
    """Force a ground corridor between two tiles.

    Returns:
        The rasterized centre line of the passage.
    """
    line = get_line(start, end)
    for point in line:
        stamp_disk(grid, point, radius)
    return line
