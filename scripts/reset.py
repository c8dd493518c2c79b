#!/usr/bin/env python3
"""Reset script for Folio.

This script will:
1. Delete the data directory (including database and logs)
2. Run migrations to create a fresh database
3. Optionally seed the default category tree
"""

import argparse
import shutil
import sys

from config import load_config
from db.manager import DatabaseManager
from cli.migrate import cmd_apply
from cli.categories import cmd_seed
from services.base import Services
from logger import setup_logging


def reset(seed: bool = False):
    """Reset the application state."""
    print("Folio Reset Script")
    print("=" * 50)

    config = load_config()

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print("To enable reset, set enable_reset=true in ~/.config/folio.toml")
        sys.exit(1)

    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")

    response = input("\nThis will delete ALL data. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    setup_logging(config)

    print("\nRunning migrations...")
    db_manager = DatabaseManager(config)
    args = argparse.Namespace(file=None)
    cmd_apply(args, db_manager)

    if seed:
        print("\nSeeding categories...")
        cmd_seed(args, Services(config, db_manager=db_manager))

    print("\n" + "=" * 50)
    print("Reset complete! Database has been recreated.")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Wipe and recreate the Folio database")
    parser.add_argument(
        "--seed", action="store_true", help="Seed the default category tree"
    )
    reset(seed=parser.parse_args().seed)
