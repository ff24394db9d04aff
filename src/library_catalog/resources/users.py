"""User Resources - User Directory

Resources:
- library://users/list - every user as ``{id, name, username}``
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..database.repository import StorageError
from ..database.session import session_scope
from ..database.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserSummary(BaseModel):
    id: int
    name: str
    username: str


class UserListResponse(BaseModel):
    users: list[UserSummary] = Field(..., description="All users, in id order")
    total: int = Field(..., description="Number of users")


async def list_users_handler() -> dict[str, Any]:
    """Returns the user directory."""
    try:
        with session_scope() as session:
            users = UserRepository(session).list_users()

        response = UserListResponse(
            users=[UserSummary(**user.summary()) for user in users],
            total=len(users),
        )
        return response.model_dump()

    except StorageError as e:
        logger.exception("Error in users/list resource")
        raise ResourceError(f"Failed to retrieve users: {e!s}") from e


user_resources: list[dict[str, Any]] = [
    {
        "uri": "library://users/list",
        "name": "Users",
        "description": "Everyone a book can be issued to, with their ID, name and username.",
        "mime_type": "application/json",
        "handler": list_users_handler,
    },
]
