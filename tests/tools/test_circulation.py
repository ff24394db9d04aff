"""
Tests for circulation tools (issue, return).

These tests exercise the MCP handlers end to end against a test database:
1. Input validation and identifier parsing
2. Success scenarios
3. Error kinds reported to the client
4. State changes visible through the resources
"""

import pytest

from library_catalog.database.schema import Book as BookDB
from library_catalog.resources.books import list_available_books_handler
from library_catalog.tools.circulation import (
    MAX_RECORD_ID,
    issue_book_handler,
    parse_record_id,
    return_book_handler,
)


def _text(result):
    return result["content"][0]["text"]


def _issued(db_manager, book_id):
    with db_manager.session_scope() as session:
        return session.get(BookDB, book_id).issued


class TestParseRecordId:
    """Identifiers arrive as operator-typed strings."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1", 1),
            ("42", 42),
            ("  7 ", 7),
            ("007", 7),
            (7, 7),
            (str(MAX_RECORD_ID), MAX_RECORD_ID),
        ],
    )
    def test_valid_ids(self, raw, expected):
        assert parse_record_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "abc", "1.5", "-1", "+1", "0", "1e3", "١٢", str(MAX_RECORD_ID + 1)]
        + [None, True],
    )
    def test_invalid_ids(self, raw):
        assert parse_record_id(raw) is None


class TestIssueBookTool:
    """Test the issue_book MCP tool."""

    async def test_issue_success(self, global_db, dune_and_ada):
        """Issuing an available book to a known user marks it issued."""
        result = await issue_book_handler(book_id="1", user_id="7")

        assert "isError" not in result
        assert _text(result) == "Book 1 ('Dune') issued to user 7."
        assert result["data"]["user_id"] == 7
        assert result["data"]["book"] == {
            "id": 1,
            "title": "Dune",
            "author": "Herbert",
            "issued": True,
        }
        assert _issued(global_db, 1) is True

    async def test_issue_accepts_integer_ids(self, global_db, dune_and_ada):
        result = await issue_book_handler(book_id=1, user_id=7)

        assert "isError" not in result
        assert _issued(global_db, 1) is True

    async def test_issue_unknown_book(self, global_db, dune_and_ada):
        result = await issue_book_handler(book_id="99", user_id="7")

        assert result["isError"] is True
        assert result["data"]["error"] == "BookNotFound"
        assert _issued(global_db, 1) is False

    async def test_unknown_book_reported_before_unknown_user(self, global_db, dune_and_ada):
        result = await issue_book_handler(book_id="99", user_id="99")

        assert result["data"]["error"] == "BookNotFound"

    async def test_unknown_book_reported_before_unparseable_user(self, global_db, dune_and_ada):
        result = await issue_book_handler(book_id="99", user_id="ada")

        assert result["data"]["error"] == "BookNotFound"

    async def test_issue_unknown_user(self, global_db, dune_and_ada):
        result = await issue_book_handler(book_id="1", user_id="8")

        assert result["isError"] is True
        assert result["data"]["error"] == "UserNotFound"
        assert _issued(global_db, 1) is False

    @pytest.mark.parametrize("book_id", ["abc", "", "-1", "0", "1.0"])
    async def test_unparseable_book_id_is_not_found(self, global_db, dune_and_ada, book_id):
        result = await issue_book_handler(book_id=book_id, user_id="7")

        assert result["isError"] is True
        assert result["data"]["error"] == "BookNotFound"

    @pytest.mark.parametrize("user_id", ["ada", "", "7x", "0"])
    async def test_unparseable_user_id_is_not_found(self, global_db, dune_and_ada, user_id):
        result = await issue_book_handler(book_id="1", user_id=user_id)

        assert result["isError"] is True
        assert result["data"]["error"] == "UserNotFound"
        assert _issued(global_db, 1) is False

    async def test_issue_already_issued_book_succeeds(self, global_db, dune_and_ada):
        await issue_book_handler(book_id="1", user_id="7")

        result = await issue_book_handler(book_id="1", user_id="7")

        assert "isError" not in result
        assert _issued(global_db, 1) is True

    @pytest.mark.parametrize(
        ("book_id", "user_id"),
        [(["1"], "7"), ("1", {"id": 7}), (None, "7"), (1.5, "7")],
    )
    async def test_invalid_arguments(self, global_db, dune_and_ada, book_id, user_id):
        result = await issue_book_handler(book_id=book_id, user_id=user_id)

        assert result["isError"] is True
        assert result["data"]["error"] == "InvalidInput"

    async def test_storage_error(self, broken_db):
        result = await issue_book_handler(book_id="1", user_id="7")

        assert result["isError"] is True
        assert result["data"]["error"] == "StorageError"


class TestReturnBookTool:
    """Test the return_book MCP tool."""

    async def test_return_success(self, global_db, dune_and_ada):
        await issue_book_handler(book_id="1", user_id="7")

        result = await return_book_handler(book_id="1")

        assert "isError" not in result
        assert _text(result) == "Book 1 ('Dune') returned."
        assert result["data"]["book"]["issued"] is False
        assert _issued(global_db, 1) is False

    async def test_return_available_book(self, global_db, dune_and_ada):
        result = await return_book_handler(book_id="1")

        assert result["isError"] is True
        assert result["data"]["error"] == "NotIssued"
        assert _issued(global_db, 1) is False

    async def test_return_twice(self, global_db, dune_and_ada):
        await issue_book_handler(book_id="1", user_id="7")
        await return_book_handler(book_id="1")

        result = await return_book_handler(book_id="1")

        assert result["data"]["error"] == "NotIssued"

    @pytest.mark.parametrize("book_id", ["99", "abc", ""])
    async def test_return_unknown_book(self, global_db, dune_and_ada, book_id):
        result = await return_book_handler(book_id=book_id)

        assert result["isError"] is True
        assert result["data"]["error"] == "BookNotFound"

    async def test_invalid_book_id_type(self, global_db):
        result = await return_book_handler(book_id=None)

        assert result["data"]["error"] == "InvalidInput"

    async def test_storage_error(self, broken_db):
        result = await return_book_handler(book_id="1")

        assert result["data"]["error"] == "StorageError"


class TestCirculationScenario:
    """The issue/return cycle as seen through the available-books resource."""

    async def test_issue_then_return(self, global_db, dune_and_ada):
        result = await issue_book_handler(book_id="1", user_id="7")
        assert "isError" not in result

        available = await list_available_books_handler()
        assert available == {"books": [], "total": 0}

        result = await return_book_handler(book_id="1")
        assert "isError" not in result

        available = await list_available_books_handler()
        assert available == {
            "books": [{"id": 1, "title": "Dune", "author": "Herbert"}],
            "total": 1,
        }
