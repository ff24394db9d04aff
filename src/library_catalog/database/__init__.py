"""
Database package for the Library Catalog.

This package provides:
- SQLAlchemy schema definitions (schema.py)
- Session management and connection handling (session.py)
- The catalog store, user directory and circulation repositories
- Seeding helpers for the users table (seed.py)
"""

from .book_repository import BookRepository
from .circulation_repository import CirculationRepository
from .errors import (
    BookNotFound,
    NotFoundError,
    NotIssued,
    RepositoryException,
    StorageError,
    UserNotFound,
)
from .repository import BaseRepository
from .schema import Base, Book, User
from .session import (
    DatabaseManager,
    get_db_manager,
    get_session,
    reset_db_manager,
    safe_commit,
    safe_query,
    session_scope,
)
from .user_repository import UserRepository

__all__ = [
    "Base",
    "BaseRepository",
    "Book",
    "BookNotFound",
    "BookRepository",
    "CirculationRepository",
    "DatabaseManager",
    "NotFoundError",
    "NotIssued",
    "RepositoryException",
    "StorageError",
    "User",
    "UserNotFound",
    "UserRepository",
    "get_db_manager",
    "get_session",
    "reset_db_manager",
    "safe_commit",
    "safe_query",
    "session_scope",
]
