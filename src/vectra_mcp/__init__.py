"""MCP server exposing the Vectra knowledge-base API as tools over stdio."""

__version__ = "0.1.0"

from .errors import ApiError, ErrorCodes, ErrorKind, MCPError  # noqa: E402
from .mcp_base import MCPResult, MCPServer, MCPTool  # noqa: E402

__all__ = ["MCPServer", "MCPTool", "MCPResult", "MCPError", "ApiError", "ErrorCodes", "ErrorKind"]
