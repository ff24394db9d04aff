"""
Circulation tools for the Library Catalog MCP server.

1. issue_book: mark a book as issued to a user
2. return_book: mark an issued book as available again

Identifiers arrive as the strings an operator typed. They are parsed here, at
the boundary, and anything that is not a valid record id is reported exactly
like an id that does not exist: ``BookNotFound`` or ``UserNotFound``.
"""

import logging
from typing import Annotated, Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..database.circulation_repository import CirculationRepository
from ..database.repository import BookNotFound, NotFoundError, StorageError, UserNotFound
from ..database.session import get_session
from .responses import INVALID_INPUT, error_response, success_response

logger = logging.getLogger(__name__)

# Largest value a signed 32-bit id column can hold
MAX_RECORD_ID = 2**31 - 1


def parse_record_id(raw: str | int | None) -> int | None:
    """
    Parse an operator-supplied record id.

    Surrounding whitespace is ignored. Returns None for anything that is not a
    plain positive integer within the id column's range; never raises.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = raw.strip()
        if not text.isascii() or not text.isdigit():
            return None
        value = int(text)
    if value < 1 or value > MAX_RECORD_ID:
        return None
    return value


class _RecordIdInput(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Any:
        """Accept numbers as well as strings for identifiers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


BookIdArg = Annotated[
    str | int,
    Field(description="ID of the book, as shown in library://books/available", examples=["1"]),
]

UserIdArg = Annotated[
    str | int,
    Field(description="ID of the user, as shown in library://users/list", examples=["7"]),
]


# =============================================================================
# ISSUE TOOL
# =============================================================================


class IssueBookInput(_RecordIdInput):
    """Validated arguments of the issue_book tool."""

    book_id: str
    user_id: str


async def issue_book_handler(book_id: BookIdArg, user_id: UserIdArg) -> dict[str, Any]:
    """
    Handler for the issue_book tool.

    The book is resolved before the user, so an unknown book is reported as
    ``BookNotFound`` whatever the user id is. Issuing a book that is already
    issued succeeds.
    """
    try:
        params = IssueBookInput(book_id=book_id, user_id=user_id)
    except ValidationError as e:
        logger.warning("Invalid issue parameters: %s", e)
        return error_response(INVALID_INPUT, f"Invalid issue parameters: {e}")

    parsed_book_id = parse_record_id(params.book_id)
    if parsed_book_id is None:
        logger.info("Issue declined - unparseable book id %r", params.book_id)
        return error_response("BookNotFound", str(BookNotFound(params.book_id)))

    with get_session() as session:
        try:
            repo = CirculationRepository.for_session(session)

            parsed_user_id = parse_record_id(params.user_id)
            if parsed_user_id is None:
                # Book resolution still comes first
                repo.resolve_book(parsed_book_id)
                raise UserNotFound(params.user_id)

            book = repo.issue(parsed_book_id, parsed_user_id)

        except NotFoundError as e:
            logger.info("Issue declined: %s", e)
            return error_response(type(e).__name__, str(e))

        except StorageError as e:
            logger.exception("Issue failed - storage error")
            return error_response("StorageError", f"Failed to issue book: {e!s}")

    return success_response(
        f"Book {book.id} ('{book.title}') issued to user {parsed_user_id}.",
        {"book": book.model_dump(), "user_id": parsed_user_id},
    )


# =============================================================================
# RETURN TOOL
# =============================================================================


class ReturnBookInput(_RecordIdInput):
    """Validated arguments of the return_book tool."""

    book_id: str


async def return_book_handler(book_id: BookIdArg) -> dict[str, Any]:
    """
    Handler for the return_book tool.

    Only an issued book can be returned; returning an available one is
    declined with ``NotIssued``.
    """
    try:
        params = ReturnBookInput(book_id=book_id)
    except ValidationError as e:
        logger.warning("Invalid return parameters: %s", e)
        return error_response(INVALID_INPUT, f"Invalid return parameters: {e}")

    parsed_book_id = parse_record_id(params.book_id)
    if parsed_book_id is None:
        logger.info("Return declined - unparseable book id %r", params.book_id)
        return error_response("BookNotFound", str(BookNotFound(params.book_id)))

    with get_session() as session:
        try:
            book = CirculationRepository.for_session(session).return_book(parsed_book_id)

        except NotFoundError as e:
            logger.info("Return declined: %s", e)
            return error_response(type(e).__name__, str(e))

        except StorageError as e:
            logger.exception("Return failed - storage error")
            return error_response("StorageError", f"Failed to return book: {e!s}")

    return success_response(
        f"Book {book.id} ('{book.title}') returned.",
        {"book": book.model_dump()},
    )


# The server registers each handler as-is; FastMCP derives the tool's input
# schema from the handler signature.
issue_book: dict[str, Any] = {
    "name": "issue_book",
    "description": (
        "Issue a book to a user. Both IDs are required; the book must exist in the "
        "catalog and the user in the user directory. Issuing a book that is already "
        "issued is allowed."
    ),
    "handler": issue_book_handler,
}

return_book: dict[str, Any] = {
    "name": "return_book",
    "description": (
        "Return an issued book so it becomes available again. Fails if the book is "
        "not currently issued."
    ),
    "handler": return_book_handler,
}
