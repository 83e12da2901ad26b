"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from winter_tracker import __version__
from winter_tracker.config import get_settings
from winter_tracker.flows.build import build_all
from winter_tracker.flows.seed import seed_cache

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str, debug: bool = False) -> None:
    """Configure root logging for CLI and server runs."""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="winter-tracker",
        description="Meteorological vs astronomical winter temperature tracker",
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
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'seed' command - pre-seed the static cache
    seed_parser = subparsers.add_parser("seed", help="Download historical years into the cache")
    seed_parser.add_argument(
        "--start-year",
        type=int,
        default=None,
        help="First year to seed (default: start_year from settings)",
    )
    seed_parser.add_argument(
        "--end-year",
        type=int,
        default=None,
        help="Last year to seed (default and maximum: current year - 2)",
    )

    # 'refresh' command - seed cache and build site
    subparsers.add_parser("refresh", help="Seed cache and build static site")

    # 'serve' command - run the API server
    serve_parser = subparsers.add_parser("serve", help="Run the web app")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Station: {settings.station}")
    print(f"Static cache: {settings.static_cache_url or settings.static_cache_dir}")
    print(f"Dynamic cache: {settings.resolved_dynamic_cache_dir}")
    print(f"API key configured: {'yes' if settings.rapidapi_key else 'no'}")
    return 0


def cmd_seed(args: argparse.Namespace) -> int:
    """Handle the 'seed' command."""
    result = seed_cache(start_year=args.start_year, end_year=args.end_year)
    print(
        f"Seeded {result['seeded']}, skipped {result['skipped']}, failed {result['failed']} years."
    )
    return 1 if result["failed"] else 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: seed the cache then build the site."""
    print("Seeding cache...")
    seed_cache()

    print("Building site...")
    build_all()

    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: run the API and page with uvicorn."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    print(f"Serving on http://{settings.api_host}:{port}/ (Ctrl+C to stop)")
    uvicorn.run(
        "winter_tracker.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=port,
        log_level="debug" if args.debug else settings.log_level.lower(),
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    configure_logging(settings.log_level, debug=getattr(args, "debug", False) or settings.debug)

    commands = {
        "info": cmd_info,
        "seed": cmd_seed,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
