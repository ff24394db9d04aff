"""
Initialize the Library Catalog database.

This script:
1. Creates the ``books`` and ``users`` tables if they do not exist
2. Optionally seeds generated users and sample books
3. Verifies the expected tables are present

Usage:
    library-init-db [--drop-existing] [--users N] [--sample-books] [--database-url URL]
"""

import argparse
import logging
import sys

from sqlalchemy import inspect

from .config import get_config
from .database.repository import StorageError
from .database.seed import seed_books, seed_users
from .database.session import DatabaseManager, get_db_manager

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {"books", "users"}


def initialize(
    db_manager: DatabaseManager,
    drop_existing: bool = False,
    users: int = 0,
    sample_books: bool = False,
) -> set[str]:
    """
    Create the schema, seed it, and return the names of the tables found.

    Raises:
        StorageError: If the database cannot be reached or a table is missing
    """
    if not db_manager.verify_connection():
        raise StorageError("Failed to connect to database")

    db_manager.init_database(drop_existing=drop_existing)

    with db_manager.session_scope() as session:
        if users:
            seed_users(session, count=users)
        if sample_books:
            seed_books(session)

    tables = set(inspect(db_manager.engine).get_table_names())
    logger.info("Tables present: %s", ", ".join(sorted(tables)))

    missing_tables = EXPECTED_TABLES - tables
    if missing_tables:
        raise StorageError(f"Missing expected tables: {sorted(missing_tables)}")

    return tables


def main(argv: list[str] | None = None) -> int:
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(description="Initialize the Library Catalog database")
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        help="Drop existing tables before creating new ones",
    )
    parser.add_argument(
        "--users",
        type=int,
        default=0,
        metavar="N",
        help="Seed N generated users",
    )
    parser.add_argument(
        "--sample-books",
        action="store_true",
        help="Seed a handful of sample books",
    )
    parser.add_argument(
        "--database-url",
        help="Override the default SQLite database URL",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_config().effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    db_manager = get_db_manager(args.database_url)
    try:
        initialize(
            db_manager,
            drop_existing=args.drop_existing,
            users=args.users,
            sample_books=args.sample_books,
        )
    except StorageError:
        logger.exception("Database initialization failed")
        return 1
    finally:
        db_manager.close()

    logger.info("Database initialization complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
