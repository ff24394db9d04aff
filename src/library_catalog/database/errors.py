"""
Exception hierarchy shared by the session helpers and the repositories.

    RepositoryException
    ├── StorageError        persistence unreachable, query or commit failed
    └── NotFoundError       expected, recoverable input errors
        ├── BookNotFound
        ├── UserNotFound
        └── NotIssued

``StorageError`` is fatal to the current operation. ``NotFoundError`` and its
subclasses mean the operation was declined; presentation layers report them
back to the operator and carry on.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""


class StorageError(RepositoryException):
    """Raised when the database cannot be reached or a statement fails."""


class NotFoundError(RepositoryException):
    """Raised when an entity is not found."""


class BookNotFound(NotFoundError):
    """No book matches the given identifier."""

    def __init__(self, book_id: object) -> None:
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class UserNotFound(NotFoundError):
    """No user matches the given identifier."""

    def __init__(self, user_id: object) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class NotIssued(NotFoundError):
    """The book exists but is not currently issued, so it cannot be returned."""

    def __init__(self, book_id: object) -> None:
        self.book_id = book_id
        super().__init__(f"Book {book_id} is not currently issued")
