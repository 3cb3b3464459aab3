"""
Entry point for the period planner MCP server.
"""

import logging

from . import mcp
from .tools import settings

logger = logging.getLogger(__name__)


def main():
    """Starts the server for local development."""
    logging.basicConfig(level=settings.log_level)
    logger.info("Server running at http://%s:%d", settings.host, settings.port)

    # Start the FastMCP server with HTTP transport
    mcp.run(transport="streamable-http", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
