"""
Book model for the Library Catalog.

This is the value handed back to callers by the catalog store. It mirrors
one row of the ``books`` table and is exposed through the MCP resource
``library://books/available``.
"""

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """
    Represents a book in the library catalog.

    ``issued`` is the only record of availability: there is no field saying
    who holds an issued book.
    """

    id: int = Field(
        ...,
        description="Store-assigned identifier, never reused",
        gt=0,
        examples=[1, 42],
    )

    # Blank titles and authors are accepted, as the catalog always has
    title: str = Field(
        default="",
        description="The title of the book",
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author: str = Field(
        default="",
        description="The book's author as entered by the operator",
        examples=["Frank Herbert", "Ursula K. Le Guin"],
    )

    issued: bool = Field(
        default=False,
        description="True while the book is issued to someone",
    )

    @property
    def is_available(self) -> bool:
        """Check if the book can be found on the shelf."""
        return not self.issued

    def summary(self) -> dict[str, int | str]:
        """The ``{id, title, author}`` projection used in listings."""
        return {"id": self.id, "title": self.title, "author": self.author}

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "issued": False,
            }
        },
    )
