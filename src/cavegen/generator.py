"""Main cave generation orchestration."""

import time
from typing import Iterator

import numpy as np
import structlog

from .anchors import sample_anchors
from .automaton import (
    apply_neighbour_cost,
    fill_enclosed_void,
    run_simulation,
    seed_grid,
)
from .classification import CellKind, tier_counts
from .config import CaveConfig
from .connector import Passage, connect_rooms
from .exceptions import ConfigError
from .grid import Grid
from .regions import prune_map
from .rooms import RoomGraph
from .types import VOID, WorldPoint

logger = structlog.get_logger()


class GenerationResult:
    """Finished grid, room graph and passages of one generation run."""

    def __init__(
        self,
        grid: Grid,
        rooms: RoomGraph,
        passages: list[Passage],
        config: CaveConfig,
        rng: np.random.Generator,
    ):
        self.grid = grid
        self.rooms = rooms
        self.passages = passages
        self.config = config
        self._rng = rng

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def sample_anchors(self, luck: float) -> Iterator[WorldPoint]:
        """Randomly chosen world positions on ground cells.

        Draws from the run's random source, so repeated calls differ.
        """
        return sample_anchors(
            self.grid,
            luck,
            self._rng,
            cell_size=self.config.cell_size,
            ground_level=self.config.ground_level,
        )

    def stats(self) -> dict[str, int | float]:
        """Summary statistics of the finished map."""
        total = self.grid.width * self.grid.height
        void = self.grid.count(VOID)
        tiers = tier_counts(self.grid, self.config.border_cost_max)
        return {
            "cells": total,
            "ground": total - void,
            "void": void,
            "ground_fraction": (total - void) / total if total else 0.0,
            "border": tiers[CellKind.BORDER],
            "core": tiers[CellKind.CORE],
            "rooms": len(self.rooms),
            "passages": len(self.passages),
            "largest_room": max((room.size for room in self.rooms), default=0),
        }


class CaveGenerator:
    """Generates connected cave maps of a fixed size.

    Args:
        width: Grid width in cells.
        height: Grid height in cells (defaults to width).
        config: Generation parameters (defaults to CaveConfig()).
    """

    def __init__(
        self,
        width: int,
        height: int | None = None,
        config: CaveConfig | None = None,
    ):
        if height is None:
            height = width
        if width < 0 or height < 0:
            raise ConfigError(f"Grid size must not be negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.config = config if config is not None else CaveConfig()

    def generate(self, rng: np.random.Generator | None = None) -> GenerationResult:
        """Run the full pipeline on a freshly seeded grid."""
        if rng is None:
            rng = np.random.default_rng(self.config.seed)
        return self.generate_from(seed_grid(self.width, self.height, self.config, rng), rng)

    def generate_from(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> GenerationResult:
        """Run the pipeline starting from an already seeded grid.

        The input grid is not modified.

        Args:
            grid: Seed grid holding VOID / GROUND values.
            rng: Random source kept for anchor sampling.

        Returns:
            GenerationResult with the cost-annotated grid and room graph.
        """
        if rng is None:
            rng = np.random.default_rng(self.config.seed)
        config = self.config
        start_time = time.time()

        logger.info(
            "generation_started",
            width=grid.width,
            height=grid.height,
            seed=config.seed,
        )

        # Stage A: Smoothing
        grid = run_simulation(grid.copy(), config.simulation_steps)
        logger.debug("simulation_complete", steps=config.simulation_steps)

        # Stage B: Region pruning
        regions = prune_map(
            grid,
            config.ground_region_threshold,
            config.void_region_threshold,
            preserve_edge_void=config.preserve_edge_void,
        )

        # Stage C: Rooms and passages
        rooms = RoomGraph.from_regions(regions, grid)
        if rooms.rooms:
            passages = connect_rooms(grid, rooms, config.connections_radius)
        else:
            logger.warning("no_surviving_rooms", ground_threshold=config.ground_region_threshold)
            passages = []

        # Stage D: Finalization
        if config.fill_enclosed_void:
            filled = fill_enclosed_void(grid)
            logger.debug("enclosed_void_filled", cells=filled)
        apply_neighbour_cost(grid)

        result = GenerationResult(grid, rooms, passages, config, rng)
        logger.info(
            "generation_complete",
            duration_ms=round((time.time() - start_time) * 1000, 1),
            **result.stats(),
        )
        return result


def generate_cave(
    width: int,
    height: int | None = None,
    config: CaveConfig | None = None,
) -> GenerationResult:
    """Generate a cave map in one call.

    Args:
        width: Grid width in cells.
        height: Grid height in cells (defaults to width).
        config: Generation parameters.

    Returns:
        GenerationResult of the run.
    """
    return CaveGenerator(width, height, config).generate()
