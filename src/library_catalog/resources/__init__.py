"""Library Catalog MCP Resources Package

Resources are the read-only side of the server:
- library://books/available
- library://users/list

Anything that changes state is a tool instead (see ``library_catalog.tools``).
"""

from .books import book_resources
from .users import user_resources

all_resources = book_resources + user_resources

__all__ = [
    "all_resources",
    "book_resources",
    "user_resources",
]
