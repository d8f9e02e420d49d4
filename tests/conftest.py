"""Shared test fixtures for cave generation tests."""

import numpy as np
import pytest

from cavegen.config import CaveConfig
from cavegen.grid import Grid
from cavegen.types import GROUND


def blob_grid(width: int, height: int, blobs: list[tuple[int, int, int, int]]) -> Grid:
    """Void grid with rectangular ground blobs given as (x, y, w, h)."""
    grid = Grid(width, height)
    for x, y, w, h in blobs:
        grid.cells[y:y + h, x:x + w] = GROUND
    return grid


@pytest.fixture
def two_blobs() -> Grid:
    """20x20 void grid with two 3x3 blobs in opposite corners.

    Blob A covers x,y in [2, 4], blob B covers x,y in [14, 16].
    """
    return blob_grid(20, 20, [(2, 2, 3, 3), (14, 14, 3, 3)])


@pytest.fixture
def four_blobs() -> Grid:
    """40x40 void grid with two close pairs of blobs far from each other.

    A (5x5) at (2, 2) and B (3x3) at (10, 2) along the top,
    C (3x3) at (2, 30) and D (3x3) at (8, 30) along the bottom.
    """
    return blob_grid(40, 40, [(2, 2, 5, 5), (10, 2, 3, 3), (2, 30, 3, 3), (8, 30, 3, 3)])


@pytest.fixture
def handmade_config() -> CaveConfig:
    """Config for pipelines fed with handmade grids: no smoothing, small thresholds."""
    return CaveConfig(
        seed=1,
        simulation_steps=0,
        ground_region_threshold=5,
        void_region_threshold=5,
        connections_radius=1,
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
