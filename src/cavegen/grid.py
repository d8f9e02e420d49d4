"""Bounds-checked 2D cell grid backed by a numpy array."""

from typing import Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

from .types import GROUND, VOID, Cell, Coord


class Grid:
    """Width x height grid of integer cells.

    Storage is a numpy array of shape (height, width) indexed `[y, x]`.
    Iteration is row-major: y outer, x inner. Out-of-range reads return
    None and out-of-range writes are ignored.
    """

    def __init__(self, width: int, height: int | None = None, fill: int = VOID):
        if height is None:
            height = width
        self.width = width
        self.height = height
        self.cells: NDArray[np.uint8] = np.full((height, width), fill, dtype=np.uint8)

    @classmethod
    def from_array(cls, cells: NDArray) -> "Grid":
        """Wrap a copy of an existing (height, width) array."""
        height, width = cells.shape
        grid = cls(width, height)
        grid.cells = np.asarray(cells, dtype=np.uint8).copy()
        return grid

    @classmethod
    def from_rows(cls, rows: list[str], ground: str = "#") -> "Grid":
        """Build a grid from text rows, `ground` characters become GROUND."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char == ground:
                    grid.cells[y, x] = GROUND
        return grid

    def copy(self) -> "Grid":
        return Grid.from_array(self.cells)

    def in_range(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int | None:
        """Cell value, or None when (x, y) is outside the grid."""
        if not self.in_range(x, y):
            return None
        return int(self.cells[y, x])

    def set(self, x: int, y: int, value: int) -> None:
        """Store a value; silently ignored outside the grid."""
        if self.in_range(x, y):
            self.cells[y, x] = value

    def is_ground(self, x: int, y: int) -> bool:
        """True for in-range cells holding a non-zero value."""
        value = self.get(x, y)
        return value is not None and value != VOID

    def flag(self, coords: Iterable[Coord], value: int) -> None:
        """Write the same value to every coordinate in `coords`."""
        for coord in coords:
            self.set(coord.x, coord.y, value)

    def __iter__(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield Cell(x, y, int(self.cells[y, x]))

    def neighbourhood(self, x: int, y: int) -> Iterator[Cell]:
        """Yield the in-range cells of the 3x3 window centred on (x, y).

        The centre cell itself is included.
        """
        for ny in range(y - 1, y + 2):
            for nx in range(x - 1, x + 2):
                if self.in_range(nx, ny):
                    yield Cell(nx, ny, int(self.cells[ny, nx]))

    def ground_mask(self) -> NDArray[np.bool_]:
        return self.cells != VOID

    def count(self, value: int) -> int:
        return int(np.sum(self.cells == value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def to_rows(self, ground: str = "#", void: str = ".") -> list[str]:
        """Render as text rows, the inverse of `from_rows`."""
        return [
            "".join(ground if value != VOID else void for value in row)
            for row in self.cells
        ]
