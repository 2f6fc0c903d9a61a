"""Command-line interface for heightfield generation."""

import argparse
import logging
import sys
import time
import tomllib
from pathlib import Path

from .types import DistanceType, Distribution, Easing, Generator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate procedural terrain heightmaps")
    parser.add_argument(
        "--config", type=str, default=None, help="TOML file with generation options"
    )
    parser.add_argument(
        "--generator",
        "-g",
        choices=[g.value for g in Generator],
        default=None,
        help="Heightmap generator (default: diamond_square)",
    )
    parser.add_argument("--x-segments", type=int, default=None, help="Grid columns minus one")
    parser.add_argument("--y-segments", type=int, default=None, help="Grid rows minus one")
    parser.add_argument("--min-height", type=float, default=None, help="Lowest elevation")
    parser.add_argument("--max-height", type=float, default=None, help="Highest elevation")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--steps", type=int, default=None, help="Number of flat bands")
    parser.add_argument("--frequency", type=float, default=None, help="Noise frequency")
    parser.add_argument(
        "--easing", choices=[e.value for e in Easing], default=None, help="Easing curve"
    )
    parser.add_argument(
        "--distance-type",
        choices=[d.value for d in DistanceType],
        default=None,
        help="Worley distance metric",
    )
    parser.add_argument(
        "--distribution",
        choices=[d.value for d in Distribution],
        default=None,
        help="Worley seed distribution",
    )
    parser.add_argument("--worley-points", type=int, default=None, help="Worley seed count")
    parser.add_argument(
        "--turbulent", action="store_true", default=None, help="Fold the field into ridges"
    )
    parser.add_argument(
        "--no-stretch",
        dest="stretch",
        action="store_false",
        default=None,
        help="Truncate to the height range instead of stretching",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="heightfield.npz",
        help="Output .npz path (default: heightfield.npz)",
    )
    parser.add_argument("--image", type=str, default=None, help="Also write a PNG heightmap")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    """Collect the options given on the command line."""
    mapping = {
        "heightmap": args.generator,
        "x_segments": args.x_segments,
        "y_segments": args.y_segments,
        "min_height": args.min_height,
        "max_height": args.max_height,
        "seed": args.seed,
        "steps": args.steps,
        "frequency": args.frequency,
        "easing": args.easing,
        "distance_type": args.distance_type,
        "worley_distribution": args.distribution,
        "worley_points": args.worley_points,
        "turbulent": args.turbulent,
        "stretch": args.stretch,
    }
    return {key: value for key, value in mapping.items() if value is not None}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for heightfield generation."""
    args = build_parser().parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Import here to avoid slow startup for --help
    from pydantic import ValidationError

    from .config import GenerationOptions, load_options
    from .generator import generate_and_save
    from .imaging import save_image

    try:
        if args.config:
            options = load_options(Path(args.config), **_overrides(args))
        else:
            options = GenerationOptions.model_validate(_overrides(args))
    except (FileNotFoundError, tomllib.TOMLDecodeError, ValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    output_path = Path(args.output)
    print(f"Generating {options.cols}x{options.rows} heightfield with seed {options.seed}")
    print(f"Output: {output_path}")
    print()

    start_time = time.time()
    grid = generate_and_save(options, output_path)
    gen_time = time.time() - start_time

    print()
    print(f"Generation complete in {gen_time:.2f}s")

    if args.image:
        image_path = Path(args.image)
        image_path.parent.mkdir(parents=True, exist_ok=True)
        save_image(image_path, grid, options)
        print(f"Image saved to {image_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
