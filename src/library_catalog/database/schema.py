"""
SQLAlchemy database schema for the Library Catalog.

Two tables back the whole system:

1. ``books(id, title, author, issued)`` - the catalog and each book's
   availability flag
2. ``users(id, name, username)`` - the people books can be issued to

There is deliberately no table linking a book to the user it was issued to;
the ``issued`` flag is the only circulation state that is persisted.
"""

from sqlalchemy import Boolean, Column, Integer, String, false
from sqlalchemy.orm import declarative_base

# Base class for all SQLAlchemy models
Base = declarative_base()

# Width of the text columns
TEXT_COLUMN_LENGTH = 100


class Book(Base):
    """
    Books table - stores the library's catalog.

    MCP Usage:
    - Resource: library://books/available
    - Tools: add_book inserts rows, issue_book / return_book flip ``issued``
    """

    __tablename__ = "books"

    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(TEXT_COLUMN_LENGTH), nullable=False, default="")
    author = Column(String(TEXT_COLUMN_LENGTH), nullable=False, default="")
    issued = Column(Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = ({"sqlite_autoincrement": True},)

    def __repr__(self) -> str:
        return f"<Book id={self.id} title={self.title!r} issued={self.issued}>"


class User(Base):
    """
    Users table - people a book can be issued to.

    Rows are only created by seeding; the catalog itself never writes here.

    MCP Usage:
    - Resource: library://users/list
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(TEXT_COLUMN_LENGTH), nullable=False, default="")
    username = Column(String(TEXT_COLUMN_LENGTH), nullable=False, default="")

    __table_args__ = ({"sqlite_autoincrement": True},)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
