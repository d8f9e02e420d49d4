"""Command-line interface for cave generation."""

import argparse
import logging
import time

import structlog

ASCII_TIERS = {0: ".", 1: "+", 2: "#"}


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog console output."""
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a connected cellular cave map")
    parser.add_argument("--width", type=int, default=80, help="Map width (default: 80)")
    parser.add_argument(
        "--height", type=int, default=None, help="Map height (default: width)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--steps", type=int, default=None, help="Smoothing iterations")
    parser.add_argument(
        "--alive", type=float, default=None, help="Chance a seed cell starts as ground"
    )
    parser.add_argument("--radius", type=int, default=None, help="Passage radius")
    parser.add_argument(
        "--config", type=str, default=None, help="Path or name of a TOML config"
    )
    parser.add_argument(
        "--ascii", action="store_true", help="Print the finished map as text"
    )
    parser.add_argument(
        "--heightmap", action="store_true", help="Also print terrain band coverage of a noise height map"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for cave generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    # Import here to avoid slow startup for --help
    from .classification import classify_costs
    from .config import CaveConfig, FileConfig, find_config, load_config
    from .generator import CaveGenerator
    from .heightmap import band_counts, classify_heights, generate_height_map
    from .validation import validate_cave

    file_config = load_config(find_config(args.config)) if args.config else FileConfig()
    config = file_config.cave

    overrides = {
        "seed": args.seed,
        "simulation_steps": args.steps,
        "chance_to_start_alive": args.alive,
        "connections_radius": args.radius,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        config = CaveConfig.model_validate({**config.model_dump(), **overrides})

    height = args.height if args.height is not None else args.width
    print(f"Generating {args.width}x{height} cave")

    start_time = time.time()
    result = CaveGenerator(args.width, height, config).generate()
    gen_time = time.time() - start_time

    print(f"Generation complete in {gen_time:.2f}s")
    for name, value in result.stats().items():
        print(f"  {name}: {value:.3f}" if isinstance(value, float) else f"  {name}: {value}")

    validation = validate_cave(result)
    for error in validation.errors:
        print(f"  error: {error}")

    if args.ascii:
        kinds = classify_costs(result.grid, config.border_cost_max)
        for row in kinds:
            print("".join(ASCII_TIERS[int(kind)] for kind in row))

    if args.heightmap:
        heightmap_config = file_config.heightmap
        if heightmap_config.seed is None and config.seed is not None:
            heightmap_config = heightmap_config.model_copy(update={"seed": config.seed})
        heights = generate_height_map(args.width, height, heightmap_config)
        indices = classify_heights(heights, heightmap_config.bands)
        print("Terrain bands:")
        for name, count in band_counts(indices, heightmap_config.bands).items():
            print(f"  {name}: {count}")


if __name__ == "__main__":
    main()
