"""Fractal noise height maps with named terrain bands.

Noise octaves are Gaussian-filtered white noise rather than per-pixel
simplex samples; the summed field is rescaled to [0, 1] by its own
minimum and maximum.
"""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from .config import HeightMapConfig, TerrainBand


def _gaussian_noise_2d(
    width: int,
    height: int,
    rng: np.random.Generator,
    wavelength: float,
) -> NDArray[np.float32]:
    """Generate smooth noise using a Gaussian filter on a random field.

    Args:
        width: Output width.
        height: Output height.
        rng: Random number generator.
        wavelength: Approximate wavelength of features in tiles.

    Returns:
        2D noise array in range roughly [-1, 1].
    """
    white_noise = rng.standard_normal((height, width)).astype(np.float32)

    # sigma proportional to wavelength
    sigma = wavelength / 3.0
    smoothed = ndimage.gaussian_filter(white_noise, sigma=sigma, mode="wrap")

    std = np.std(smoothed)
    if std > 0:
        smoothed /= 2.5 * std

    return smoothed


def inverse_lerp(low: float, high: float, values: NDArray[np.float32]) -> NDArray[np.float32]:
    """Position of each value between low and high, clamped to [0, 1]."""
    if high == low:
        return np.zeros_like(values)
    return ((np.clip(values, low, high) - low) / (high - low)).astype(np.float32)


def generate_height_map(width: int, height: int, config: HeightMapConfig) -> NDArray[np.float32]:
    """Generate a normalised fBm height map.

    Args:
        width: Output width in tiles.
        height: Output height in tiles.
        config: Noise parameters; `seed=None` draws fresh entropy.

    Returns:
        (height, width) float32 array with values in [0, 1].
    """
    seed_sequence = np.random.SeedSequence(config.seed)
    result = np.zeros((height, width), dtype=np.float32)

    wavelength = config.base_wavelength
    amplitude = 1.0

    for octave_seed in seed_sequence.spawn(config.octaves):
        octave_rng = np.random.default_rng(octave_seed)
        result += amplitude * _gaussian_noise_2d(width, height, octave_rng, wavelength)
        wavelength /= config.lacunarity
        amplitude *= config.persistence

    return inverse_lerp(float(result.min()), float(result.max()), result)


def classify_heights(
    heights: NDArray[np.float32],
    bands: list[TerrainBand],
) -> NDArray[np.uint8]:
    """Assign each sample the index of the first band at or above it.

    Samples above every band fall into the last band.

    Args:
        heights: Height map with values in [0, 1].
        bands: Terrain bands ordered by ascending height.

    Returns:
        Array of band indices, same shape as `heights`.
    """
    if not bands:
        raise ValueError("At least one terrain band is required")

    limits = np.array([band.height for band in bands], dtype=np.float32)
    if np.any(np.diff(limits) < 0):
        raise ValueError("Terrain bands must be ordered by ascending height")
    indices = np.searchsorted(limits, heights, side="left")
    return np.minimum(indices, len(bands) - 1).astype(np.uint8)


def band_counts(indices: NDArray[np.uint8], bands: list[TerrainBand]) -> dict[str, int]:
    """Count samples per band name."""
    counts = np.bincount(indices.ravel(), minlength=len(bands))
    return {band.name: int(counts[i]) for i, band in enumerate(bands)}
