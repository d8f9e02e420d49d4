"""Cave generation configuration models and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

CONFIGS_DIR = Path(__file__).parent / "configs"


class CaveConfig(BaseModel, frozen=True):
    """Cellular cave generation parameters."""

    seed: int | None = Field(
        default=None, description="Random seed (None = unseeded, differs per run)"
    )
    chance_to_start_alive: float = Field(
        default=0.58, ge=0.0, le=1.0, description="Probability a seed cell is ground"
    )
    border_width: int = Field(
        default=2, ge=0, description="Margin of cells forced to void when seeding"
    )
    void_region_threshold: int = Field(
        default=50, ge=0, description="Void regions smaller than this become ground"
    )
    ground_region_threshold: int = Field(
        default=50, ge=0, description="Ground regions smaller than this become void"
    )
    simulation_steps: int = Field(
        default=8, ge=0, description="Number of smoothing iterations"
    )
    connections_radius: int = Field(
        default=3, ge=0, description="Disk radius stamped along passages"
    )
    fill_enclosed_void: bool = Field(
        default=True, description="Turn void cells with no void neighbours into ground"
    )
    preserve_edge_void: bool = Field(
        default=True, description="Never fill void regions touching the map edge"
    )
    border_cost_max: int = Field(
        default=7, ge=1, le=8, description="Highest neighbour cost still classed as border"
    )
    cell_size: float = Field(default=1.0, gt=0.0, description="World units per cell")
    ground_level: float = Field(default=0.0, description="World height of anchors")


class TerrainBand(BaseModel, frozen=True):
    """A named height band; samples at or below `height` fall into it."""

    name: str
    height: float = Field(ge=0.0, le=1.0)


def _default_bands() -> list[TerrainBand]:
    return [
        TerrainBand(name="deep_water", height=0.30),
        TerrainBand(name="water", height=0.40),
        TerrainBand(name="sand", height=0.50),
        TerrainBand(name="grass", height=0.55),
        TerrainBand(name="grass_dark", height=0.65),
        TerrainBand(name="rock", height=0.75),
        TerrainBand(name="deep_rock", height=1.0),
    ]


class HeightMapConfig(BaseModel, frozen=True):
    """Fractal noise height map parameters."""

    seed: int | None = Field(default=None, description="Random seed for noise")
    base_wavelength: float = Field(
        default=40.0, gt=0.0, description="Wavelength of the lowest octave in tiles"
    )
    octaves: int = Field(default=5, ge=1, description="Number of octaves for fBm")
    lacunarity: float = Field(
        default=2.0, gt=0.0, description="Frequency multiplier per octave"
    )
    persistence: float = Field(
        default=0.5, ge=0.0, description="Amplitude multiplier per octave"
    )
    bands: list[TerrainBand] = Field(default_factory=_default_bands)


class FileConfig(BaseModel):
    """Configuration file layout: `[cave]` and `[heightmap]` tables."""

    cave: CaveConfig = Field(default_factory=CaveConfig)
    heightmap: HeightMapConfig = Field(default_factory=HeightMapConfig)


def load_config(config_path: Path) -> FileConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed FileConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values are out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return FileConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. cavegen/configs/{name}.toml
    3. cavegen/configs/{name}

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    config_path = CONFIGS_DIR / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = CONFIGS_DIR / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {CONFIGS_DIR}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    if not CONFIGS_DIR.exists():
        return []
    return sorted(p.stem for p in CONFIGS_DIR.glob("*.toml"))
