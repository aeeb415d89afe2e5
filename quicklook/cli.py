"""Command-line interface for quicklook."""

import argparse
import logging
import sys
from pathlib import Path

from quicklook.config import QuicklookConfig
from quicklook.imaging import load_band, save_quicklook
from quicklook.scaling import as_sample_grid, get_factor, reduce_grid, scale_band


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def build_config(args: argparse.Namespace) -> QuicklookConfig:
    """Build a configuration from an optional YAML file and CLI overrides."""
    if getattr(args, "config", None):
        config = QuicklookConfig.from_yaml(args.config)
    else:
        config = QuicklookConfig()

    # CLI flags override values from the config file
    if args.nodata is not None:
        config.nodata = args.nodata
    if args.scale is not None:
        config.scale = args.scale
    if args.offset is not None:
        config.offset = args.offset
    if args.workers is not None:
        config.workers = args.workers
    if args.hdu is not None:
        config.hdu = args.hdu

    # Re-run validation on the merged values
    return QuicklookConfig.from_dict(config.to_dict())


def cmd_convert(args: argparse.Namespace) -> int:
    """Handle 'convert' command."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}")
        return 1

    output_path = Path(args.output) if args.output else input_path.with_suffix(".png")

    try:
        config = build_config(args)
        band = load_band(input_path, hdu=config.hdu)
        grid = scale_band(band, config.parameters(), workers=config.workers)
        save_quicklook(grid, output_path)
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Wrote {grid.width}x{grid.height} quicklook to {output_path}")
    return 0


def cmd_extrema(args: argparse.Namespace) -> int:
    """Handle 'extrema' command."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}")
        return 1

    try:
        config = build_config(args)
        band = load_band(input_path, hdu=config.hdu)
        reduced = reduce_grid(as_sample_grid(band), config.parameters())
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    extrema = reduced.extrema
    print(f"Size: {reduced.width}x{reduced.height}")
    if extrema.is_empty:
        print("No valid pixels (every sample equals nodata)")
        return 0

    print(f"  Min:    {extrema.min:.6g}")
    print(f"  Max:    {extrema.max:.6g}")
    print(f"  Range:  {extrema.range:.6g}")
    print(f"  Factor: {float(get_factor(extrema.range)):.6g}")
    return 0


def cmd_build_config(args: argparse.Namespace) -> int:
    """Handle 'build-config' command."""
    output_path = Path(args.output) if args.output else Path("quicklook.yaml")

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    config.to_yaml(output_path)
    print(f"Configuration saved to {output_path}")
    return 0


def _add_parameter_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the conversion parameter flags shared by several commands."""
    parser.add_argument("--nodata", type=float, help="No-data (fill) value")
    parser.add_argument(
        "--scale",
        type=float,
        help="Scale applied to each sample (0 is treated as 1.0)",
    )
    parser.add_argument("--offset", type=float, help="Offset applied to each sample")
    parser.add_argument("--workers", type=int, help="Number of conversion threads")
    parser.add_argument("--hdu", type=int, help="FITS HDU index (default: first 2-D HDU)")


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="quicklook",
        description="Greyscale byte quicklooks from float instrument bands",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # convert subcommand
    convert_parser = subparsers.add_parser("convert", help="Convert a FITS band to a PNG quicklook")
    convert_parser.add_argument(
        "--input",
        "-i",
        type=str,
        required=True,
        help="FITS file holding the float band",
    )
    convert_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output PNG file (default: <input>.png)",
    )
    convert_parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to YAML configuration file",
    )
    _add_parameter_arguments(convert_parser)

    # extrema subcommand
    extrema_parser = subparsers.add_parser(
        "extrema", help="Print the extrema and scale factor of a FITS band"
    )
    extrema_parser.add_argument(
        "--input",
        "-i",
        type=str,
        required=True,
        help="FITS file holding the float band",
    )
    extrema_parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to YAML configuration file",
    )
    _add_parameter_arguments(extrema_parser)

    # build-config subcommand
    build_config_parser = subparsers.add_parser(
        "build-config", help="Create a YAML configuration file from CLI args"
    )
    build_config_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output YAML file path (default: quicklook.yaml)",
    )
    _add_parameter_arguments(build_config_parser)

    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.command == "convert":
        return cmd_convert(args)
    elif args.command == "extrema":
        return cmd_extrema(args)
    elif args.command == "build-config":
        return cmd_build_config(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
