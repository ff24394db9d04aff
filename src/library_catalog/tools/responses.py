"""
Response payloads shared by the MCP tools.

Tools answer with human-readable text for the model plus a ``data`` block for
programmatic follow-up. Failures carry ``isError`` and name the failure kind
in ``data["error"]`` (``BookNotFound``, ``UserNotFound``, ``NotIssued``,
``StorageError`` or ``InvalidInput``).
"""

from typing import Any

INVALID_INPUT = "InvalidInput"


def success_response(text: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    response: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if data is not None:
        response["data"] = data
    return response


def error_response(kind: str, text: str) -> dict[str, Any]:
    return {
        "isError": True,
        "content": [{"type": "text", "text": text}],
        "data": {"error": kind},
    }
