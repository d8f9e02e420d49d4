"""Tests for noise height maps and terrain bands."""

import numpy as np
import pytest

from cavegen.config import HeightMapConfig, TerrainBand
from cavegen.heightmap import (
    band_counts,
    classify_heights,
    generate_height_map,
    inverse_lerp,
)


class TestGenerateHeightMap:
    """Tests for fBm height map generation."""

    def test_shape_and_range(self) -> None:
        """Output is (height, width) and normalised to [0, 1]."""
        heights = generate_height_map(48, 32, HeightMapConfig(seed=3))

        assert heights.shape == (32, 48)
        assert heights.dtype == np.float32
        assert heights.min() == pytest.approx(0.0)
        assert heights.max() == pytest.approx(1.0)

    def test_seed_is_deterministic(self) -> None:
        """The same seed gives the same map."""
        config = HeightMapConfig(seed=11, octaves=3)
        np.testing.assert_array_equal(
            generate_height_map(20, 20, config), generate_height_map(20, 20, config)
        )

    def test_seeds_differ(self) -> None:
        """Different seeds give different maps."""
        a = generate_height_map(20, 20, HeightMapConfig(seed=1))
        b = generate_height_map(20, 20, HeightMapConfig(seed=2))
        assert not np.array_equal(a, b)


class TestInverseLerp:
    """Tests for inverse_lerp."""

    def test_rescales_and_clamps(self) -> None:
        """Values map linearly into [0, 1] and clamp outside the range."""
        values = np.array([-1.0, 0.0, 1.0, 2.0, 3.0], dtype=np.float32)
        np.testing.assert_allclose(inverse_lerp(0.0, 2.0, values), [0.0, 0.0, 0.5, 1.0, 1.0])

    def test_flat_range(self) -> None:
        """A degenerate range maps everything to zero."""
        values = np.ones(4, dtype=np.float32)
        np.testing.assert_array_equal(inverse_lerp(1.0, 1.0, values), np.zeros(4))


class TestClassifyHeights:
    """Tests for terrain band assignment."""

    BANDS = [
        TerrainBand(name="water", height=0.4),
        TerrainBand(name="grass", height=0.7),
        TerrainBand(name="rock", height=0.9),
    ]

    def test_band_assignment(self) -> None:
        """Each sample takes the first band at or above it; overflow goes last."""
        heights = np.array([[0.0, 0.4, 0.41], [0.7, 0.95, 1.0]], dtype=np.float32)
        np.testing.assert_array_equal(classify_heights(heights, self.BANDS), [[0, 0, 1], [1, 2, 2]])

    def test_unordered_bands_rejected(self) -> None:
        """Bands must ascend."""
        with pytest.raises(ValueError):
            classify_heights(np.zeros((2, 2), dtype=np.float32), list(reversed(self.BANDS)))

    def test_empty_bands_rejected(self) -> None:
        """At least one band is required."""
        with pytest.raises(ValueError):
            classify_heights(np.zeros((2, 2), dtype=np.float32), [])

    def test_band_counts_cover_map(self) -> None:
        """Band counts sum to the map size and name every band."""
        heights = generate_height_map(30, 30, HeightMapConfig(seed=5))
        config = HeightMapConfig()
        counts = band_counts(classify_heights(heights, config.bands), config.bands)

        assert list(counts) == [band.name for band in config.bands]
        assert sum(counts.values()) == 900
