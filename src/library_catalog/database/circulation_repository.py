"""
Circulation repository implementation for the Library Catalog.

Every book moves through a two-state cycle:

    Available --issue--> Issued --return--> Available --> ...

This repository enforces that cycle on top of the catalog store and the user
directory:

1. **Issue**: the book and the user must both exist; the book's current state
   is not checked, so issuing an issued book succeeds again
2. **Return**: the book must exist and must currently be issued
3. **Availability**: the catalog filtered down to books that are not issued

The user an issued book went to is not recorded anywhere. Nothing here locks
rows: resolving a book and flipping its flag are separate statements, which
is only safe with a single operator.
"""

import logging

from sqlalchemy.orm import Session

from ..models.book import Book as BookModel
from .book_repository import BookRepository
from .repository import BookNotFound, NotIssued, UserNotFound
from .user_repository import UserRepository

logger = logging.getLogger(__name__)


class CirculationRepository:
    """
    Repository for circulation operations.

    The catalog store and user directory are passed in rather than looked up,
    so the caller decides which session (and which database) is used.
    """

    def __init__(self, books: BookRepository, users: UserRepository):
        self.books = books
        self.users = users

    @classmethod
    def for_session(cls, session: Session) -> "CirculationRepository":
        """Build the repository and both collaborators from one session."""
        return cls(BookRepository(session), UserRepository(session))

    def resolve_book(self, book_id: int) -> BookModel:
        """Find a book by exact id in the catalog listing, else ``BookNotFound``."""
        for book in self.books.list_books():
            if book.id == book_id:
                return book
        raise BookNotFound(book_id)

    def issue(self, book_id: int, user_id: int) -> BookModel:
        """
        Issue a book to a user.

        Steps:
        1. Resolve the book, else ``BookNotFound``
        2. Resolve the user, else ``UserNotFound``
        3. Mark the book issued

        A book that is already issued is issued again without complaint.

        Returns:
            The book in its new state

        Raises:
            BookNotFound: If no book has this id (checked before the user)
            UserNotFound: If no user has this id
            StorageError: On database errors
        """
        book = self.resolve_book(book_id)

        user = self.users.find_user(user_id)
        if user is None:
            raise UserNotFound(user_id)

        if book.issued:
            logger.info("Book %d is already issued; issuing again to user %d", book.id, user.id)

        self.books.mark_issued(book.id)
        logger.info(
            "Issued book %d (%r) to user %d (%s)", book.id, book.title, user.id, user.username
        )
        return book.model_copy(update={"issued": True})

    def return_book(self, book_id: int) -> BookModel:
        """
        Return an issued book.

        Returns:
            The book in its new state

        Raises:
            BookNotFound: If no book has this id
            NotIssued: If the book is currently available
            StorageError: On database errors
        """
        book = self.resolve_book(book_id)

        if not book.issued:
            raise NotIssued(book.id)

        self.books.mark_returned(book.id)
        logger.info("Returned book %d (%r)", book.id, book.title)
        return book.model_copy(update={"issued": False})

    def list_available(self) -> list[BookModel]:
        """
        List books that are not issued, in catalog order.

        Raises:
            StorageError: If the catalog cannot be read
        """
        return [book for book in self.books.list_books() if not book.issued]
