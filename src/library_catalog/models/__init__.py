"""
Library Catalog Models.

Pydantic models returned by the repositories:
- Book: catalog entries and their issued/available flag
- User: people a book can be issued to
"""

from .book import Book
from .user import User

__all__ = [
    "Book",
    "User",
]
