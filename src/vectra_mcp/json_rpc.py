"""
JSON-RPC 2.0 Transport Utilities

Low-level JSON-RPC message handling for MCP server communication.
Used by mcp_base.py; tool implementations never import it directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class JsonRpcRequest:
    """A JSON-RPC 2.0 request or notification."""

    jsonrpc: str
    method: str
    id: str | int | None = None
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


def parse_request(msg: Any) -> JsonRpcRequest | None:
    """Build a JsonRpcRequest from a decoded message, or None if malformed."""
    if not is_valid_request(msg):
        return None
    params = msg.get("params")
    return JsonRpcRequest(
        jsonrpc=msg["jsonrpc"],
        method=msg["method"],
        id=msg.get("id"),
        params=params if isinstance(params, dict) else None,
    )


def success_response(request_id: str | int | None, result: Any) -> dict[str, Any]:
    """Create a JSON-RPC success response."""
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def error_response(
    request_id: str | int | None,
    code: int,
    message: str,
    data: Any = None,
) -> dict[str, Any]:
    """Create a JSON-RPC error response."""
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


def is_valid_request(msg: Any) -> bool:
    """Validate that a parsed value is a JSON-RPC 2.0 request or notification."""
    if not isinstance(msg, dict):
        return False
    if msg.get("jsonrpc") != "2.0" or not isinstance(msg.get("method"), str):
        return False
    # Notifications omit the id entirely
    if "id" in msg and not isinstance(msg["id"], (str, int)):
        return False
    params = msg.get("params")
    return params is None or isinstance(params, dict)
