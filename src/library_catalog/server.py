"""Library Catalog MCP Server

Exposes the catalog to MCP clients over stdio (or streamable HTTP):

- Resources (read-only): library://books/available, library://users/list
- Tools (side effects): add_book, issue_book, return_book

The ``books`` and ``users`` tables are created, if absent, before the server
starts accepting requests.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from library_catalog.config import get_config
from library_catalog.database.repository import StorageError
from library_catalog.database.session import get_db_manager
from library_catalog.resources import all_resources
from library_catalog.tools import all_tools

logger = logging.getLogger(__name__)

config = get_config()

mcp = FastMCP(
    name=config.server_name,
    version=config.server_version,
    instructions=(
        "Library Catalog - a small library management system. Read "
        "library://books/available and library://users/list to find IDs, then use "
        "add_book, issue_book and return_book to change the catalog."
    ),
)

for resource in all_resources:
    logger.debug("Registering resource: %s with URI: %s", resource["name"], resource["uri"])
    mcp.resource(
        uri=resource["uri"],
        name=resource["name"],
        description=resource["description"],
        mime_type=resource["mime_type"],
    )(resource["handler"])

for tool in all_tools:
    logger.debug("Registering tool: %s", tool["name"])
    mcp.tool(
        name=tool["name"],
        description=tool["description"],
    )(tool["handler"])


def run_server(transport: str) -> None:
    """Run the MCP server until it is interrupted.

    On stdio, stdin receives JSON-RPC requests, stdout sends responses and
    logs go to stderr. ``streamable_http`` serves the same surface over HTTP
    on FastMCP's default host and port.
    """
    logger.info(
        "Starting %s v%s on %s transport", config.server_name, config.server_version, transport
    )

    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        if transport == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(transport="streamable-http")
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)
    finally:
        get_db_manager().close()


def main() -> None:
    """Entry point for ``library-catalog-mcp``."""
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    logger.info("Library Catalog MCP Server %s", config.server_version)
    logger.info("Registered %d resources and %d tools", len(all_resources), len(all_tools))

    try:
        get_db_manager().init_database()
    except StorageError:
        logger.exception("Failed to connect to the database")
        sys.exit(1)

    run_server(config.transport)


if __name__ == "__main__":
    main()
