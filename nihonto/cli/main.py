"""Main CLI entry point for the nihonto catalog pipeline."""

import argparse
import sys

from nihonto.logger import setup_logging

from .commands.catalog import setup_catalog_commands
from .commands.extract import setup_extract_commands
from .commands.translate import setup_translate_commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nihonto",
        description="Juyo Zufu catalog pipeline - page extraction and setsumei translation",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--env-file", help="Read settings from this .env file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    setup_extract_commands(subparsers)
    setup_translate_commands(subparsers)
    setup_catalog_commands(subparsers)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    # Execute command
    if hasattr(args, "func"):
        return args.func(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
