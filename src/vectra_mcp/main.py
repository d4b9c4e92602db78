"""
Vectra MCP Server: Entry Point

Loads configuration from the environment, opens the Vectra API client,
registers all tools and runs the JSON-RPC listener on stdio until stdin
closes. Logs go to stderr; stdout carries protocol messages only.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from . import __version__
from .client import VectraClient
from .config import Settings
from .errors import ConfigError
from .mcp_base import MCPServer
from .tools import build_tools

SERVER_NAME = "vectra-mcp-server"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_logger = logging.getLogger("vectra.main")


def configure_logging(level: str = "INFO") -> None:
    """Send all log records to stderr."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    resolved = logging.getLevelName(level.upper())
    root_logger.setLevel(resolved if isinstance(resolved, int) else logging.INFO)


def build_server(client: VectraClient, settings: Settings) -> MCPServer:
    return MCPServer(name=SERVER_NAME, version=__version__, tools=build_tools(client, settings))


async def run(settings: Settings) -> None:
    async with VectraClient(settings) as client:
        server = build_server(client, settings)
        _logger.info("Forwarding tool calls to %s", settings.api_url)
        await server.serve()


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        configure_logging()
        _logger.critical("Configuration error: %s", e)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        _logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
