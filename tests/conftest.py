"""Test configuration and fixtures for the Library Catalog.

1. Isolated test databases - each test gets its own SQLite file
2. Configuration overrides - a test config pointing at that file
3. Global manager patching - MCP handlers and the console use the test
   database through the normal ``get_session`` / ``session_scope`` helpers
4. Seed data - the Dune / Ada scenario used across the suite
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy.orm import Session

from library_catalog.config import LibraryConfig, reset_config
from library_catalog.database import session as session_module
from library_catalog.database.book_repository import BookRepository
from library_catalog.database.circulation_repository import CirculationRepository
from library_catalog.database.schema import Book as BookDB
from library_catalog.database.schema import User as UserDB
from library_catalog.database.session import DatabaseManager
from library_catalog.database.user_repository import UserRepository

# === Test Database Fixtures ===


@pytest.fixture
def test_db_path(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary database path for each test."""
    db_path = tmp_path / "test_library.db"
    yield db_path

    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def test_database_url(test_db_path: Path) -> str:
    return f"sqlite:///{test_db_path}"


@pytest.fixture
def db_manager(test_database_url: str) -> Generator[DatabaseManager, None, None]:
    """A database manager with both tables created."""
    manager = DatabaseManager(test_database_url)
    manager.init_database()
    yield manager
    manager.close()


@pytest.fixture
def test_db_session(db_manager: DatabaseManager) -> Generator[Session, None, None]:
    """Provide a SQLAlchemy session bound to the test database."""
    session = db_manager.create_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def global_db(db_manager: DatabaseManager, monkeypatch) -> DatabaseManager:
    """Make the module-level session helpers use the test database."""
    monkeypatch.setattr(session_module, "_db_manager", db_manager)
    return db_manager


@pytest.fixture
def broken_db(monkeypatch) -> Generator[DatabaseManager, None, None]:
    """A global manager whose database has no tables, so every query fails."""
    manager = DatabaseManager("sqlite:///:memory:")
    monkeypatch.setattr(session_module, "_db_manager", manager)
    yield manager
    manager.close()


# === Repository Fixtures ===


@pytest.fixture
def repositories(test_db_session: Session) -> dict:
    books = BookRepository(test_db_session)
    users = UserRepository(test_db_session)
    return {
        "book": books,
        "user": users,
        "circulation": CirculationRepository(books, users),
    }


# === Seed Data Fixtures ===


@pytest.fixture
def dune_and_ada(db_manager: DatabaseManager) -> tuple[int, int]:
    """Seed Book{1, "Dune", "Herbert"} and User{7, "Ada", "ada"}."""
    with db_manager.session_scope() as session:
        session.add(BookDB(id=1, title="Dune", author="Herbert", issued=False))
        session.add(UserDB(id=7, name="Ada", username="ada"))
    return 1, 7


# === Configuration Fixtures ===


@pytest.fixture
def test_config(test_db_path: Path) -> Generator[LibraryConfig, None, None]:
    """Provide a test-specific configuration."""
    reset_config()

    config = LibraryConfig(
        server_name="test-library-catalog",
        server_version="0.0.1-test",
        database_path=test_db_path,
        admin_username="admin",
        admin_password="admin",
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide an environment without LIBRARY_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LIBRARY_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Reset the global configuration after each test."""
    yield
    reset_config()
