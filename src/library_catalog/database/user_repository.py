"""
User repository implementation for the Library Catalog.

The user directory is read-only: users are listed and looked up, never
created, changed or removed from here.
"""

from ..database.schema import User as UserDB
from ..models.user import User as UserModel
from .repository import BaseRepository


class UserRepository(BaseRepository[UserDB, UserModel]):
    """Repository for user data access."""

    @property
    def model_class(self):
        return UserDB

    @property
    def response_schema(self):
        return UserModel

    def list_users(self) -> list[UserModel]:
        """
        List every user in id order.

        Raises:
            StorageError: If the users table cannot be read
        """
        return self.get_all()

    def find_user(self, user_id: int) -> UserModel | None:
        """Find a user by id with a linear scan over ``list_users``.

        The directory is expected to hold at most a few thousand users.
        """
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None
