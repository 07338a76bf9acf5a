"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys
import zipfile
from pathlib import Path

import requests

from hab_effort import __version__
from hab_effort.config import get_settings
from hab_effort.datasources.regions import RegionDataError
from hab_effort.flows.build import build_effort, plot_cells
from hab_effort.flows.fetch import fetch_all
from hab_effort.reference.regions import UnknownRegionError

#: Failures that abort a run: fetch errors, malformed input, lookup mismatches.
PIPELINE_ERRORS = (
    requests.RequestException,
    zipfile.BadZipFile,
    RegionDataError,
    UnknownRegionError,
    ValueError,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="hab-effort",
        description="Phytoplankton sampling effort per HAB region and year",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")
    subparsers.add_parser("fetch", help="Download occurrences and regions into the cache")

    build_parser = subparsers.add_parser("build", help="Compute the effort report")
    build_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Report path (default: report_path from settings)",
    )

    subparsers.add_parser("refresh", help="Fetch data and build the report")

    plot_parser = subparsers.add_parser("plot", help="Plot sampled grid cells for a region/year")
    plot_parser.add_argument("--region", required=True, help="Region code, e.g. EUR")
    plot_parser.add_argument("--year", type=int, required=True, help="Calendar year")
    plot_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="PNG path (default: plot_path from settings)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Data directory: {settings.data_dir}")
    print(f"Taxa: {', '.join(str(t) for t in settings.taxon_ids)}")
    print(f"Grid resolution: {settings.grid_resolution}")
    return 0


def cmd_fetch(_args: argparse.Namespace) -> int:
    """Handle the 'fetch' command."""
    result = fetch_all()
    print(f"Cached {result['occurrences']} occurrences and {result['regions']} regions.")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the 'build' command."""
    result = build_effort(output=args.output)
    print(f"Wrote {result['rows']} rows to {result['output']}")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fill caches then build the report."""
    print("Fetching data...")
    fetch_all()

    print("Building report...")
    result = build_effort()

    print(f"Done. Report: {result['output']}")
    return 0


def cmd_plot(args: argparse.Namespace) -> int:
    """Handle the 'plot' command."""
    result = plot_cells(region=args.region, year=args.year, output=args.output)
    print(f"Plot: {result['output']}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.debug:
        print(f"Debug mode enabled. Settings: {get_settings()}")

    commands = {
        "info": cmd_info,
        "fetch": cmd_fetch,
        "build": cmd_build,
        "refresh": cmd_refresh,
        "plot": cmd_plot,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except PIPELINE_ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
