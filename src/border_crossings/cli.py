"""
Command line interface for the border crossings tool.

Usage:
    border-crossings border-crossings --path takeout.zip --boundaries boundaries.geojson
    border-crossings border-crossings -p Records.json -e wifi -e cell -m
    border-crossings border-crossings -p takeout.zip -s
"""

import argparse
import sys
from datetime import timedelta
from typing import List, Optional, Sequence

from pydantic import ValidationError

from . import __version__
from .boundaries import GeoJSONBoundaryLookup
from .config import Settings
from .errors import BorderCrossingsError, ConfigurationError
from .logging import setup_logging
from .models import Source
from .pipeline import run_border_crossings
from .takeout import load_takeout_records

SOURCE_CHOICES = [source.value.lower() for source in Source]


def parse_source(value: str) -> Source:
    """argparse type for --exclude-source"""
    try:
        return Source(value.upper())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid source {value!r} (choose from {', '.join(SOURCE_CHOICES)})"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="border-crossings",
        description="Find border crossings in a Google Takeout location history",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Override LOOM_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    crossings_parser = subparsers.add_parser(
        "border-crossings",
        help="Lists every time the location crosses a recognized border",
    )
    crossings_parser.add_argument(
        "-p",
        "--path",
        required=True,
        help="The .zip or .json file that will be read to produce the command's output",
    )
    crossings_parser.add_argument(
        "-e",
        "--exclude-source",
        action="append",
        default=[],
        type=parse_source,
        metavar="SOURCE",
        help=(
            "Excludes a data source from the results; can be given multiple times "
            f"({', '.join(SOURCE_CHOICES)})"
        ),
    )
    crossings_parser.add_argument(
        "-s",
        "--ignore-subregions",
        action="store_true",
        help="Ignores border crossings between subregions such as US states, Canadian provinces, etc",
    )
    crossings_parser.add_argument(
        "-m",
        "--ignore-missing-data",
        action="store_true",
        help=(
            "Does not treat missing data as its own region and instead assumes that "
            "the region remains the same for the duration of missing data"
        ),
    )
    crossings_parser.add_argument(
        "-b",
        "--boundaries",
        help="GeoJSON file with region boundaries (defaults to LOOM_BOUNDARIES_PATH)",
    )
    return parser


def border_crossings_command(args: argparse.Namespace, settings: Settings) -> str:
    """Run the border-crossings command and return the report"""
    boundaries_path = args.boundaries or settings.boundaries_path
    if not boundaries_path:
        raise ConfigurationError(
            "no boundary data configured: pass --boundaries or set LOOM_BOUNDARIES_PATH"
        )

    lookup = GeoJSONBoundaryLookup.from_path(
        boundaries_path, id_property=settings.boundary_id_property
    )
    records = load_takeout_records(args.path, settings.takeout_records_member)
    return run_border_crossings(
        records,
        lookup,
        exclude=args.exclude_source,
        ignore_subregions=args.ignore_subregions,
        ignore_missing_data=args.ignore_missing_data,
        gap=timedelta(days=settings.missing_data_gap_days),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        overrides = {"log_level": args.log_level} if args.log_level else {}
        settings = Settings(**overrides)
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(settings.service_name, settings)

    try:
        report = border_crossings_command(args, settings)
    except BorderCrossingsError as e:
        logger.error("Border crossing report failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(report, end="")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
