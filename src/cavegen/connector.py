"""Greedy room connection: nearest pairs first, then forced reachability."""

from dataclasses import dataclass

import numpy as np
import structlog
from scipy.spatial.distance import cdist

from .grid import Grid
from .passages import carve_passage
from .rooms import Room, RoomGraph
from .types import Coord

logger = structlog.get_logger()


@dataclass
class Passage:
    """A carved connection between two rooms."""

    room_a: int
    room_b: int
    tile_a: Coord
    tile_b: Coord
    distance_squared: int
    line: list[Coord]


@dataclass
class _Candidate:
    room_a: Room
    room_b: Room
    tile_a: Coord
    tile_b: Coord
    distance_squared: int


def closest_edge_pair(room_a: Room, room_b: Room) -> tuple[int, Coord, Coord] | None:
    """Closest pair of edge tiles between two rooms by squared distance.

    Ties resolve to the first pair in (edge tile of A, edge tile of B)
    order, the same pair a nested loop with a strict comparison keeps.
    """
    edges_a = room_a.edge_array()
    edges_b = room_b.edge_array()
    if len(edges_a) == 0 or len(edges_b) == 0:
        return None

    distances = cdist(edges_a, edges_b, "sqeuclidean")
    i, j = np.unravel_index(np.argmin(distances), distances.shape)
    return int(distances[i, j]), room_a.edge_tiles[i], room_b.edge_tiles[j]


def _best_candidate(rooms_a: list[Room], rooms_b: list[Room]) -> _Candidate | None:
    """Scan candidate pairs, keeping the first strictly closest one."""
    best: _Candidate | None = None
    for candidate_a in rooms_a:
        for room_b in rooms_b:
            if candidate_a.index == room_b.index or candidate_a.is_connected(room_b):
                continue
            pair = closest_edge_pair(candidate_a, room_b)
            if pair is None:
                continue
            distance, tile_a, tile_b = pair
            if best is None or distance < best.distance_squared:
                best = _Candidate(candidate_a, room_b, tile_a, tile_b, distance)
    return best


def _create_passage(
    grid: Grid,
    graph: RoomGraph,
    candidate: _Candidate,
    radius: int,
) -> Passage:
    graph.connect(candidate.room_a, candidate.room_b)
    line = carve_passage(grid, candidate.tile_a, candidate.tile_b, radius)
    logger.debug(
        "passage_carved",
        room_a=candidate.room_a.index,
        room_b=candidate.room_b.index,
        start=str(candidate.tile_a),
        end=str(candidate.tile_b),
        length=len(line),
    )
    return Passage(
        room_a=candidate.room_a.index,
        room_b=candidate.room_b.index,
        tile_a=candidate.tile_a,
        tile_b=candidate.tile_b,
        distance_squared=candidate.distance_squared,
        line=line,
    )


def connect_nearest_rooms(grid: Grid, graph: RoomGraph, radius: int) -> list[Passage]:
    """Phase 1: link every still-unconnected room to its nearest neighbour.

    Rooms are visited in construction order and a passage is carved as
    soon as a room's best partner is known, so a room connected earlier
    as someone's partner is skipped when its own turn comes.
    """
    passages: list[Passage] = []
    for room in graph.rooms:
        if room.connected:
            continue
        best = _best_candidate([room], graph.rooms)
        if best is not None:
            passages.append(_create_passage(grid, graph, best, radius))
    return passages


def force_accessibility(grid: Grid, graph: RoomGraph, radius: int) -> list[Passage]:
    """Phase 2: bridge the unreachable rooms to the main room's component.

    Each round connects the closest pair across the accessible /
    inaccessible split, which makes at least one more room accessible,
    so it ends after at most `len(graph) - 1` rounds.
    """
    passages: list[Passage] = []
    while True:
        inaccessible = graph.inaccessible()
        accessible = graph.accessible()
        if not inaccessible or not accessible:
            break
        best = _best_candidate(inaccessible, accessible)
        if best is None:
            logger.warning("rooms_unreachable", remaining=len(inaccessible))
            break
        passages.append(_create_passage(grid, graph, best, radius))
    return passages


def connect_rooms(grid: Grid, graph: RoomGraph, radius: int) -> list[Passage]:
    """Connect all rooms so each is reachable from the main room.

    Args:
        grid: Grid to carve passages into.
        graph: Room graph with a main room marked.
        radius: Disk radius stamped along each passage.

    Returns:
        Passages in the order they were carved.
    """
    passages = connect_nearest_rooms(grid, graph, radius)
    forced = force_accessibility(grid, graph, radius)
    logger.info(
        "rooms_connected",
        rooms=len(graph),
        nearest_passages=len(passages),
        forced_passages=len(forced),
    )
    return passages + forced
