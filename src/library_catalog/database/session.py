"""
Database session management for the Library Catalog.

This module owns the SQLAlchemy engine and hands out short-lived sessions:

1. One ``DatabaseManager`` per process (see ``get_db_manager``)
2. One session per operation, opened with ``session_scope`` or ``get_session``
3. ``safe_query`` / ``safe_commit`` translate driver failures into
   ``StorageError`` so callers only ever see the catalog's own exceptions
"""

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_config
from .errors import StorageError
from .schema import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DatabaseManager:
    """
    Manages the database engine and session factory.

    The engine is created lazily on first use so that constructing a manager
    never touches the filesystem or network.
    """

    def __init__(self, database_url: str | None = None):
        """
        Initialize the database manager.

        Args:
            database_url: SQLite database URL. If None, the file from
                configuration is used.

        Raises:
            ValueError: If the URL is not a SQLite URL
        """
        if database_url is None:
            config = get_config()
            db_path = config.database_path

            if not db_path.is_absolute():
                db_path = Path.cwd() / db_path

            db_path.parent.mkdir(exist_ok=True, parents=True)

            database_url = f"sqlite:///{db_path}"
            logger.info("Using SQLite database at: %s", db_path)

        if not database_url.startswith("sqlite"):
            raise ValueError(f"Only SQLite database URLs are supported: {database_url}")

        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        """
        Get or create the database engine.

        The engine runs on a StaticPool so the single operator always reuses one
        connection, which also keeps ``sqlite:///:memory:`` databases alive
        across sessions.
        """
        if self._engine is None:
            self._engine = create_engine(
                self.database_url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=False,
            )
            logger.info("Database engine created: %s", self._engine.url)

        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,  # Keep objects usable after commit
            )
        return self._session_factory

    def create_session(self) -> Session:
        """
        Create a new database session.

        Sessions should be closed by the caller; prefer ``session_scope``.
        """
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around one operation.

        ```python
        with db_manager.session_scope() as session:
            books = BookRepository(session).list_books()
        ```

        The session is committed on success, rolled back and re-raised on any
        error, and always closed.
        """
        session = self.create_session()
        try:
            yield session
            session.commit()
            logger.debug("Database transaction committed successfully")
        except Exception:
            logger.debug("Rolling back database transaction")
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self, drop_existing: bool = False) -> None:
        """
        Create the ``books`` and ``users`` tables if they do not exist.

        Args:
            drop_existing: If True, drop all tables before creating

        Raises:
            StorageError: If the database cannot be reached
        """
        engine = self.engine

        try:
            if drop_existing:
                logger.warning("Dropping all existing tables...")
                Base.metadata.drop_all(bind=engine)

            logger.info("Creating database tables...")
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Database initialization failed: {e!s}") from e

        logger.info("Database initialization complete")

    def verify_connection(self) -> bool:
        """
        Verify the database connection is working.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database connection failed")
            return False
        logger.info("Database connection verified")
        return True

    def close(self) -> None:
        """Dispose of the engine and forget the session factory."""
        if self._engine:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None


_db_manager: DatabaseManager | None = None


def get_db_manager(database_url: str | None = None) -> DatabaseManager:
    """
    Get the global database manager instance.

    Args:
        database_url: Database URL (only used on first call)
    """
    global _db_manager  # noqa: PLW0603 - Singleton pattern for database manager

    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)

    return _db_manager


def reset_db_manager() -> None:
    """Dispose of the global manager so the next call builds a fresh one."""
    global _db_manager  # noqa: PLW0603

    if _db_manager is not None:
        _db_manager.close()
    _db_manager = None


def get_session() -> Session:
    """
    Get a new database session.

    Prefer ``session_scope()`` when the caller wants commit/rollback handled.
    """
    return get_db_manager().create_session()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Convenience context manager over the global database manager."""
    with get_db_manager().session_scope() as session:
        yield session


def safe_commit(session: Session, operation: str) -> None:
    """
    Commit a session, turning driver failures into ``StorageError``.

    Args:
        session: The database session
        operation: Description of the operation (for error messages)

    Raises:
        StorageError: If the commit fails; the session is rolled back first
    """
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError(f"Database operation '{operation}' failed: {e!s}") from e


def safe_query(session: Session, query_func: Callable[[Session], T], error_msg: str) -> T:
    """
    Execute a query, turning driver failures into ``StorageError``.

    Args:
        session: The database session
        query_func: Function that performs the query
        error_msg: Prefix for the error message

    Raises:
        StorageError: If the query fails
    """
    try:
        return query_func(session)
    except SQLAlchemyError as e:
        logger.exception("Query failed")
        raise StorageError(f"{error_msg}: Database query failed") from e
