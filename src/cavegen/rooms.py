"""Rooms and the connectivity graph between them.

Rooms live in a flat arena (`RoomGraph.rooms`) and refer to each other
by index, so the undirected connection relation holds no object cycles.
"""

from dataclasses import dataclass, field

import numpy as np
import structlog
from numpy.typing import NDArray

from .exceptions import NoSurvivingRoomsError
from .grid import Grid
from .regions import Region
from .types import ORTHOGONAL_DELTAS, Coord

logger = structlog.get_logger()


@dataclass
class Room:
    """A surviving ground region promoted to a graph node."""

    index: int
    tiles: list[Coord]
    edge_tiles: list[Coord]
    connected: set[int] = field(default_factory=set)
    is_main: bool = False
    is_accessible: bool = False

    @property
    def size(self) -> int:
        return len(self.tiles)

    def is_connected(self, other: "Room") -> bool:
        return other.index in self.connected

    def edge_array(self) -> NDArray[np.int64]:
        """Edge tiles as an (n, 2) array of (x, y), in edge-tile order."""
        return np.array([(t.x, t.y) for t in self.edge_tiles], dtype=np.int64).reshape(-1, 2)


def find_edge_tiles(tiles: list[Coord], grid: Grid) -> list[Coord]:
    """Collect the tiles bordering non-ground cells.

    A tile is listed once per orthogonal neighbour that is void or out of
    range, so exposed tiles weigh more in the nearest-pair search.
    """
    edge_tiles: list[Coord] = []
    for tile in tiles:
        for dx, dy in ORTHOGONAL_DELTAS:
            if not grid.is_ground(tile.x + dx, tile.y + dy):
                edge_tiles.append(tile)
    return edge_tiles


def build_room(index: int, region: Region, grid: Grid) -> Room:
    return Room(index=index, tiles=region, edge_tiles=find_edge_tiles(region, grid))


class RoomGraph:
    """Arena of rooms plus their undirected connections."""

    def __init__(self, rooms: list[Room] | None = None):
        self.rooms: list[Room] = rooms if rooms is not None else []
        self.connections: list[tuple[int, int]] = []

    @classmethod
    def from_regions(cls, regions: list[Region], grid: Grid) -> "RoomGraph":
        """Build one room per region and pick the main room.

        Args:
            regions: Surviving ground regions, in scan order.
            grid: The pruned grid, used for edge-tile detection.

        Returns:
            Graph with the largest room marked main and accessible.
        """
        graph = cls([build_room(i, region, grid) for i, region in enumerate(regions)])
        if graph.rooms:
            graph.mark_main_room()
        logger.debug("rooms_built", count=len(graph.rooms))
        return graph

    def __len__(self) -> int:
        return len(self.rooms)

    def __iter__(self):
        return iter(self.rooms)

    def __getitem__(self, index: int) -> Room:
        return self.rooms[index]

    @property
    def main_room(self) -> Room:
        """The main room.

        Raises:
            NoSurvivingRoomsError: If the graph has no rooms.
        """
        for room in self.rooms:
            if room.is_main:
                return room
        raise NoSurvivingRoomsError("No room survived pruning")

    def mark_main_room(self) -> Room:
        """Mark the largest room as main; ties go to the earliest built."""
        if not self.rooms:
            raise NoSurvivingRoomsError("No room survived pruning")
        main = max(self.rooms, key=lambda room: room.size)
        main.is_main = True
        main.is_accessible = True
        return main

    def connect(self, a: Room, b: Room) -> None:
        """Connect two rooms symmetrically and spread main-room access."""
        if a.is_accessible and not b.is_accessible:
            self.set_accessible(b)
        elif b.is_accessible and not a.is_accessible:
            self.set_accessible(a)

        if b.index not in a.connected:
            self.connections.append((a.index, b.index))
        a.connected.add(b.index)
        b.connected.add(a.index)

    def set_accessible(self, room: Room) -> None:
        """Mark a room and everything transitively connected to it as accessible."""
        stack = [room.index]
        while stack:
            current = self.rooms[stack.pop()]
            if current.is_accessible:
                continue
            current.is_accessible = True
            stack.extend(i for i in current.connected if not self.rooms[i].is_accessible)

    def accessible(self) -> list[Room]:
        return [room for room in self.rooms if room.is_accessible]

    def inaccessible(self) -> list[Room]:
        return [room for room in self.rooms if not room.is_accessible]

    def all_accessible(self) -> bool:
        return all(room.is_accessible for room in self.rooms)
