"""
Library Catalog Package.

A small library management system: list available books, list users, add
books, issue a book to a user and return it.

Key Components:
- models: Pydantic models returned to callers
- database: SQLAlchemy schema, sessions and repositories
- config: Configuration management with pydantic-settings
- resources / tools: the MCP surface (read-only resources, mutating tools)
- console: the interactive admin console
"""

__version__ = "0.1.0"

from . import database

__all__ = [
    "__version__",
    "database",
]
