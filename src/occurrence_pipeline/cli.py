"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys

import requests
from pydantic import ValidationError

from occurrence_pipeline import __version__
from occurrence_pipeline.config import get_settings
from occurrence_pipeline.flows.pipeline import run_pipeline
from occurrence_pipeline.flows.reports import build_reports


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="occurrence-pipeline",
        description="Fetch, integrate, clean and audit GBIF species occurrence records",
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

    # 'run' command - pipeline for one species
    run_parser = subparsers.add_parser("run", help="Run the occurrence pipeline for one species")
    run_parser.add_argument("--species", type=str, default=None, help="Scientific name")
    run_parser.add_argument("--country", type=str, default=None, help="ISO country code")
    run_parser.add_argument(
        "--years", type=str, default=None, help="Year or range, e.g. 2020,2023"
    )
    run_parser.add_argument("--limit", type=int, default=None, help="Maximum records to fetch")
    run_parser.add_argument("--seed", type=int, default=None, help="Covariate simulation seed")
    run_parser.add_argument(
        "--offline",
        action="store_true",
        help="Reuse the raw CSV from a previous run instead of calling GBIF",
    )

    # 'reports' command - one HTML report per species
    reports_parser = subparsers.add_parser("reports", help="Render one report per species")
    reports_parser.add_argument(
        "--species",
        nargs="+",
        default=None,
        help="Species names (default: report_species from settings)",
    )
    reports_parser.add_argument("--region", type=str, default=None, help="Region label")
    reports_parser.add_argument("--limit", type=int, default=None, help="Records per species")

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command."""
    settings = get_settings()
    if args.debug:
        print(f"Debug mode enabled. Settings: {settings}")

    try:
        result = run_pipeline(
            species_name=args.species,
            country=args.country,
            year_range=args.years,
            limit=args.limit,
            seed=args.seed,
            offline=args.offline,
        )
    except (LookupError, FileNotFoundError, ValidationError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if "error" in result:
        print(f"Error: {result['error']} for {result['species']}", file=sys.stderr)
        return 1

    print(f"Success: {result['cleaned']} of {result['acquired']} records retained")
    for name, path in result["outputs"].items():
        print(f"  {name}: {path}")
    return 0


def cmd_reports(args: argparse.Namespace) -> int:
    """Handle the 'reports' command."""
    try:
        result = build_reports(
            species_list=args.species,
            region=args.region,
            n_records=args.limit,
        )
    except (LookupError, ValidationError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for species, path in result["reports"].items():
        print(f"{species}: {path}")
    for species in result["skipped"]:
        print(f"{species}: skipped (no records)", file=sys.stderr)
    return 0 if result["reports"] else 1


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Species: {settings.species_name} ({settings.country}, {settings.year_range})")
    print(f"Data directory: {settings.data_dir}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "run": cmd_run,
        "reports": cmd_reports,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
