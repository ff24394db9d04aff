"""
Book repository implementation for the Library Catalog.

This is the catalog store. It owns the ``books`` table and offers exactly the
operations circulation needs:

1. **list_books**: the whole catalog, issued or not, in id order
2. **add_book**: insert a new, available book and hand back its assigned id
3. **mark_issued / mark_returned**: flip the ``issued`` flag

The mark operations do not look at the current flag; deciding whether a
transition is allowed is the circulation repository's job.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from ..database.schema import Book as BookDB
from ..database.session import safe_commit
from ..models.book import Book as BookModel
from .repository import BaseRepository, BookNotFound, StorageError

logger = logging.getLogger(__name__)


class BookRepository(BaseRepository[BookDB, BookModel]):
    """Repository for book data access."""

    @property
    def model_class(self):
        return BookDB

    @property
    def response_schema(self):
        return BookModel

    def list_books(self) -> list[BookModel]:
        """
        List every book in the catalog.

        Raises:
            StorageError: If the catalog cannot be read
        """
        return self.get_all()

    def add_book(self, title: str, author: str) -> BookModel:
        """
        Add a new book to the catalog.

        Any strings are accepted, including empty ones, and duplicates of an
        existing title/author pair are allowed. The book starts out available.

        Args:
            title: Title as entered by the operator
            author: Author as entered by the operator

        Returns:
            The created book with its store-assigned id

        Raises:
            StorageError: If the insert fails
        """
        if not title.strip() or not author.strip():
            logger.warning("Adding book with blank title or author: %r / %r", title, author)

        db_obj = BookDB(title=title, author=author, issued=False)
        try:
            self.session.add(db_obj)
            safe_commit(self.session, "create Book")
            self.session.refresh(db_obj)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Database error: {e!s}") from e

        logger.info("Added book %d: %r by %r", db_obj.id, db_obj.title, db_obj.author)
        return self._to_response_model(db_obj)

    def mark_issued(self, book_id: int) -> None:
        """
        Mark a book as issued. Succeeds on an already issued book.

        Raises:
            BookNotFound: If no book has this id
            StorageError: On database errors
        """
        self._set_issued(book_id, True)

    def mark_returned(self, book_id: int) -> None:
        """
        Mark a book as available again.

        Raises:
            BookNotFound: If no book has this id
            StorageError: On database errors
        """
        self._set_issued(book_id, False)

    def _set_issued(self, book_id: int, issued: bool) -> None:
        db_obj = self._get_row(book_id)
        if db_obj is None:
            raise BookNotFound(book_id)

        db_obj.issued = issued
        safe_commit(self.session, "update Book.issued")
        logger.debug("Book %d issued=%s", book_id, issued)
