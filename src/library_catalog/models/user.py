"""
User model for the Library Catalog.

Users are the people books are issued to. The catalog only ever reads them;
they are created by seeding the ``users`` table directly.
"""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Represents a library user who can have books issued to them."""

    id: int = Field(
        ...,
        description="Store-assigned identifier",
        gt=0,
        examples=[7],
    )

    name: str = Field(
        default="",
        description="Display name of the user",
        examples=["Ada Lovelace"],
    )

    username: str = Field(
        default="",
        description="Short login-style handle",
        examples=["ada"],
    )

    def summary(self) -> dict[str, int | str]:
        """The ``{id, name, username}`` projection used in listings."""
        return {"id": self.id, "name": self.name, "username": self.username}

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": {"id": 7, "name": "Ada Lovelace", "username": "ada"}},
    )
