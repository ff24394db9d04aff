"""
Repository pattern implementation for the Library Catalog.

Repositories keep SQLAlchemy out of the presentation layers:

1. **Separation**: MCP handlers and the console never build queries
2. **Testability**: repositories are constructed from a session, so tests can
   hand them an in-memory database
3. **Consistency**: every read goes through ``safe_query`` and every write
   through ``safe_commit``, so driver failures always surface as
   ``StorageError``
4. **Serialization**: methods return Pydantic models, never ORM rows
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from .errors import (
    BookNotFound,
    NotFoundError,
    NotIssued,
    RepositoryException,
    StorageError,
    UserNotFound,
)
from .schema import Base
from .session import safe_query

ModelType = TypeVar("ModelType", bound=Base)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)

__all__ = [
    "BaseRepository",
    "BookNotFound",
    "NotFoundError",
    "NotIssued",
    "RepositoryException",
    "StorageError",
    "UserNotFound",
]


class BaseRepository(ABC, Generic[ModelType, ResponseSchemaType]):
    """
    Abstract base repository providing the shared read operations.

    Records are always listed in primary-key order, which is stable for as
    long as the table is not mutated.
    """

    def __init__(self, session: Session):
        """Initialize repository with database session."""
        self.session = session

    @property
    @abstractmethod
    def model_class(self) -> type[ModelType]:
        """Return the SQLAlchemy model class."""

    @property
    @abstractmethod
    def response_schema(self) -> type[ResponseSchemaType]:
        """Return the Pydantic response schema."""

    def _to_response_model(self, db_obj: ModelType) -> ResponseSchemaType:
        """Convert database model to Pydantic response model."""
        return self.response_schema.model_validate(db_obj, from_attributes=True)

    def _get_row(self, id: int) -> ModelType | None:
        return safe_query(
            self.session,
            lambda s: s.get(self.model_class, id),
            f"Failed to get {self.model_class.__name__} by ID",
        )

    def get_by_id(self, id: int) -> ResponseSchemaType | None:
        """
        Get entity by ID.

        Returns:
            Pydantic model or None if not found

        Raises:
            StorageError: On database errors
        """
        db_obj = self._get_row(id)
        if db_obj is None:
            return None
        return self._to_response_model(db_obj)

    def get_all(self) -> list[ResponseSchemaType]:
        """
        Get all entities ordered by ID.

        Raises:
            StorageError: On database errors
        """
        query = select(self.model_class).order_by(self.model_class.id)
        results = safe_query(
            self.session,
            lambda s: s.execute(query).scalars().all(),
            f"Failed to list {self.model_class.__tablename__}",
        )
        return [self._to_response_model(item) for item in results]

    def exists(self, id: int) -> bool:
        """Check if entity exists by ID."""
        return self._get_row(id) is not None
