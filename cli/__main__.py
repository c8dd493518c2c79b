#!/usr/bin/env python3
"""
Folio CLI - command-line interface for managing the document category tree.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage the category tree
    documents    Assign documents to categories
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed
    python -m cli categories create "API Reference" --parent-id 2
    python -m cli categories update 5 --root
    python -m cli categories list
    python -m cli documents assign doc-42 5
    python -m cli categories stats
"""

import sys
import argparse
from cli import categories, documents, migrate
from config import load_config
from errors import FolioError
from services.base import Services
from db.manager import DatabaseManager
from logger import get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Folio - Document category management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    documents.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    return parser


def main():
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    config = load_config()
    setup_logging(config)
    logger = get_logger()

    try:
        if args.command == "migrate":
            # Migrate commands need db_manager for raw database operations
            args.func(args, DatabaseManager(config))
        else:
            args.func(args, Services(config))
    except FolioError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
