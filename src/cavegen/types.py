"""Core types for cave generation."""

from dataclasses import dataclass

from pydantic import BaseModel

# Simulation-phase cell values. After finalization ground cells carry a
# neighbour cost in [1, 8] instead of GROUND.
VOID = 0
GROUND = 1

# Orthogonal offsets: north, south, west, east
# Coordinate system: +X is East, +Y is South
ORTHOGONAL_DELTAS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


class Coord(BaseModel, frozen=True):
    """Immutable 2D tile coordinate."""

    x: int
    y: int

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def distance_squared(self, other: "Coord") -> int:
        """Squared Euclidean distance to another coordinate."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Coord(x={self.x}, y={self.y})"


@dataclass(frozen=True)
class Cell:
    """A grid address together with the value stored there."""

    x: int
    y: int
    value: int


class WorldPoint(BaseModel, frozen=True):
    """World-space position handed to scene decoration."""

    x: float
    y: float
    z: float
