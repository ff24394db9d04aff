"""
MCP Tools for the Library Catalog.

Tools are the operations with side effects:
- add_book: put a new book in the catalog
- issue_book: issue a book to a user
- return_book: bring an issued book back

Each tool is a dictionary with a name, description and async handler; the
server registers them all from ``all_tools``. Handler parameters become the
tool's input schema.
"""

from .catalog import add_book
from .circulation import issue_book, parse_record_id, return_book

all_tools = [
    add_book,
    issue_book,
    return_book,
]

__all__ = [
    "add_book",
    "all_tools",
    "issue_book",
    "parse_record_id",
    "return_book",
]
