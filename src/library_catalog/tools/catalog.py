"""
Catalog tools for the Library Catalog MCP server.

add_book is the only way new books enter the catalog. The store assigns the
id; the caller only supplies a title and an author.
"""

import logging
from typing import Annotated, Any

from pydantic import BaseModel, Field, ValidationError

from ..database.book_repository import BookRepository
from ..database.repository import StorageError
from ..database.session import get_session
from .responses import INVALID_INPUT, error_response, success_response

logger = logging.getLogger(__name__)


class AddBookInput(BaseModel):
    """
    Validated arguments of the add_book tool.

    Empty strings are accepted for both fields and duplicates are not
    rejected.
    """

    title: str
    author: str


async def add_book_handler(
    title: Annotated[str, Field(description="Title of the new book", examples=["Dune"])],
    author: Annotated[
        str, Field(description="Author of the new book", examples=["Frank Herbert"])
    ],
) -> dict[str, Any]:
    """Handler for the add_book tool."""
    try:
        params = AddBookInput(title=title, author=author)
    except ValidationError as e:
        logger.warning("Invalid add_book parameters: %s", e)
        return error_response(INVALID_INPUT, f"Invalid add_book parameters: {e}")

    with get_session() as session:
        try:
            book = BookRepository(session).add_book(params.title, params.author)
        except StorageError as e:
            logger.exception("add_book failed - storage error")
            return error_response("StorageError", f"Failed to add book: {e!s}")

    return success_response(
        f"Book added successfully with ID {book.id}.",
        {"book": book.summary()},
    )


add_book: dict[str, Any] = {
    "name": "add_book",
    "description": (
        "Add a new book to the catalog. The library assigns the book's ID; the new "
        "book starts out available."
    ),
    "handler": add_book_handler,
}
