"""Helper utilities for tests."""

from pathlib import Path
import sqlite3

from cli.migrate import apply_pending_migrations
from db.manager import DatabaseManager


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    apply_pending_migrations(conn, migrations_dir)


def migrated_file_db(config) -> DatabaseManager:
    """Create an on-disk database for config and apply all migrations.

    Useful where several threads need their own connections, which the
    shared in-memory fixture cannot provide.
    """
    db_manager = DatabaseManager(config)
    with db_manager.connect() as conn:
        run_migrations(conn, db_manager.get_migrations_dir())
    return db_manager


def make_tree(services, nodes, parent_id=None):
    """Create a category tree from nested (name, [children]) tuples.

    Returns:
        Mapping of name to created Category.
    """
    created = {}
    for name, children in nodes:
        category = services.categories.create_category(name, parent_id=parent_id)
        created[name] = category
        created.update(make_tree(services, children, category.id))
    return created
