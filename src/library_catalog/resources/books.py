"""Book Resources - Available Books

Resources:
- library://books/available - books that are not currently issued, in
  catalog order, as ``{id, title, author}``
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..database.circulation_repository import CirculationRepository
from ..database.repository import StorageError
from ..database.session import session_scope

logger = logging.getLogger(__name__)


class BookSummary(BaseModel):
    id: int
    title: str
    author: str


class AvailableBooksResponse(BaseModel):
    """Response schema for the available-books listing."""

    books: list[BookSummary] = Field(..., description="Books on the shelf, in catalog order")
    total: int = Field(..., description="Number of available books")


async def list_available_books_handler() -> dict[str, Any]:
    """Returns every book that can currently be issued."""
    try:
        with session_scope() as session:
            books = CirculationRepository.for_session(session).list_available()

        response = AvailableBooksResponse(
            books=[BookSummary(**book.summary()) for book in books],
            total=len(books),
        )
        return response.model_dump()

    except StorageError as e:
        logger.exception("Error in books/available resource")
        raise ResourceError(f"Failed to retrieve books: {e!s}") from e


book_resources: list[dict[str, Any]] = [
    {
        "uri": "library://books/available",
        "name": "Available Books",
        "description": "Books that are not currently issued, with their ID, title and author.",
        "mime_type": "application/json",
        "handler": list_available_books_handler,
    },
]
