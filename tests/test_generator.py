"""End-to-end tests for the generation pipeline."""

import numpy as np
import pytest

from cavegen.config import CaveConfig
from cavegen.exceptions import ConfigError, NoSurvivingRoomsError
from cavegen.generator import CaveGenerator, generate_cave
from cavegen.grid import Grid
from cavegen.types import VOID


class TestScenarios:
    """Reference scenarios for the pipeline."""

    def test_solid_interior_single_room(self) -> None:
        """A fully alive 10x10 map yields one room covering the non-border cells."""
        config = CaveConfig(
            seed=3,
            chance_to_start_alive=1.0,
            border_width=1,
            simulation_steps=0,
            ground_region_threshold=0,
        )
        result = CaveGenerator(10, config=config).generate()

        assert len(result.rooms) == 1
        room = result.rooms[0]
        assert room.is_main
        assert room.is_accessible
        assert room.size == 64
        assert {(t.x, t.y) for t in room.tiles} == {
            (x, y) for x in range(1, 9) for y in range(1, 9)
        }
        assert result.passages == []
        assert result.rooms.connections == []

        # Border stays void, interior core cells score 8
        assert np.all(result.grid.cells[0, :] == VOID)
        assert np.all(result.grid.cells[2:8, 2:8] == 8)

    def test_two_blobs_one_passage(self, two_blobs: Grid, handmade_config: CaveConfig) -> None:
        """Two distant blobs become two rooms joined by one carved passage."""
        result = CaveGenerator(20, config=handmade_config).generate_from(two_blobs)

        assert len(result.rooms) == 2
        assert len(result.passages) == 1
        assert result.rooms.connections == [(0, 1)]
        assert result.rooms.all_accessible()

        passage = result.passages[0]
        for point in passage.line:
            assert result.grid.get(point.x, point.y) > 0
        for k in range(4, 15):
            assert result.grid.get(k, k) > 0

    def test_all_void_has_no_rooms(self) -> None:
        """An empty seed finishes without rooms and without raising."""
        config = CaveConfig(seed=11, chance_to_start_alive=0.0)
        result = CaveGenerator(30, 20, config).generate()

        assert len(result.rooms) == 0
        assert result.passages == []
        assert result.grid.count(VOID) == 30 * 20
        with pytest.raises(NoSurvivingRoomsError):
            result.rooms.main_room

    def test_input_grid_untouched(self, two_blobs: Grid, handmade_config: CaveConfig) -> None:
        """generate_from works on a copy of its input."""
        before = two_blobs.copy()
        CaveGenerator(20, config=handmade_config).generate_from(two_blobs)
        assert two_blobs == before


class TestInvariants:
    """Properties of seeded random runs."""

    @pytest.fixture
    def result(self):
        return generate_cave(60, 45, CaveConfig(seed=42))

    def test_dimensions(self, result) -> None:
        """Result grid has the requested size."""
        assert (result.width, result.height) == (60, 45)
        assert result.grid.cells.shape == (45, 60)

    def test_every_room_accessible(self, result) -> None:
        """All rooms are reachable from the main room."""
        assert len(result.rooms) >= 1
        assert result.rooms.all_accessible()
        assert sum(room.is_main for room in result.rooms) == 1

    def test_main_room_is_largest(self, result) -> None:
        """The main room has the maximum size."""
        sizes = [room.size for room in result.rooms]
        assert result.rooms.main_room.size == max(sizes)

    def test_connections_symmetric(self, result) -> None:
        """Every connection is recorded on both rooms."""
        for room in result.rooms:
            for other in room.connected:
                assert room.index in result.rooms[other].connected

    def test_cost_range(self, result) -> None:
        """Cells are void or carry a cost in [1, 8]."""
        assert result.grid.cells.min() >= 0
        assert result.grid.cells.max() <= 8

    def test_room_tiles_are_ground(self, result) -> None:
        """Room tiles stay ground after carving and finalization."""
        for room in result.rooms:
            for tile in room.tiles:
                assert result.grid.get(tile.x, tile.y) > 0

    def test_deterministic_with_same_seed(self) -> None:
        """Same seed gives the same grid, rooms and passages."""
        config = CaveConfig(seed=2024)
        first = generate_cave(50, config=config)
        second = generate_cave(50, config=config)

        assert first.grid == second.grid
        assert [r.tiles for r in first.rooms] == [r.tiles for r in second.rooms]
        assert first.rooms.connections == second.rooms.connections
        assert [(p.tile_a, p.tile_b) for p in first.passages] == [
            (p.tile_a, p.tile_b) for p in second.passages
        ]

    def test_different_seed_different_map(self) -> None:
        """Different seeds produce different maps."""
        first = generate_cave(50, config=CaveConfig(seed=1))
        second = generate_cave(50, config=CaveConfig(seed=2))
        assert first.grid != second.grid


class TestGeneratorArguments:
    """Tests for generator construction."""

    def test_height_defaults_to_width(self) -> None:
        """Omitted height makes a square map."""
        generator = CaveGenerator(16)
        assert (generator.width, generator.height) == (16, 16)
        assert generator.config == CaveConfig()

    @pytest.mark.parametrize("size", [(-3, 5), (5, -1)])
    def test_negative_size_rejected(self, size: tuple[int, int]) -> None:
        """Negative grid sizes are refused."""
        with pytest.raises(ConfigError):
            CaveGenerator(*size)

    @pytest.mark.parametrize("size", [(0, 0), (0, 10), (10, 0)])
    def test_empty_grid_is_noop(self, size: tuple[int, int]) -> None:
        """A zero-sized grid runs to an empty result."""
        result = CaveGenerator(*size, config=CaveConfig(seed=1)).generate()

        assert result.grid.cells.shape == (size[1], size[0])
        assert len(result.rooms) == 0
        assert result.passages == []
        assert result.stats()["cells"] == 0
        assert result.stats()["ground_fraction"] == 0.0

    def test_tiny_grid_degrades_gracefully(self) -> None:
        """Thresholds larger than the map just leave it empty."""
        result = CaveGenerator(3, config=CaveConfig(seed=0, border_width=0)).generate()
        assert len(result.rooms) == 0

    def test_stats(self, two_blobs: Grid, handmade_config: CaveConfig) -> None:
        """Stats summarise the finished map."""
        result = CaveGenerator(20, config=handmade_config).generate_from(two_blobs)
        stats = result.stats()

        assert stats["cells"] == 400
        assert stats["ground"] + stats["void"] == 400
        assert stats["rooms"] == 2
        assert stats["passages"] == 1
        assert stats["largest_room"] == 9
        assert stats["border"] + stats["core"] == stats["ground"]
        assert all(type(stats[key]) is int for key in ("cells", "ground", "rooms", "largest_room"))
        assert isinstance(stats["ground_fraction"], float)
