"""
MCP Server Base Classes

Implements JSON-RPC 2.0 over stdio transport, tool registration and the
tools/call boundary that turns every tool outcome into a response envelope.

Usage:
    server = MCPServer(name="vectra-mcp-server", version="0.1.0", tools=build_tools(client, settings))
    await server.serve()
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from .errors import ApiError, ErrorCodes, MCPError
from .json_rpc import error_response, parse_request, success_response
from .validation import parse_arguments

_logger = logging.getLogger("vectra.server")

DEFAULT_PROTOCOL_VERSION = "2024-11-05"

# Max bytes in one stdin request line.
STDIN_LINE_LIMIT = 64 * 1024 * 1024

# ─── Type Variables ──────────────────────────────────────────────────────────

TParams = TypeVar("TParams", bound=BaseModel)
TResult = TypeVar("TResult")

# ─── Result Type ─────────────────────────────────────────────────────────────


@dataclass
class MCPResult(Generic[TResult]):
    """Result returned by a tool execution: either data or an error."""

    success: bool
    data: TResult | None = None
    error: ApiError | None = None

    @classmethod
    def ok(cls, data: TResult) -> MCPResult[TResult]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ApiError) -> MCPResult[TResult]:
        return cls(success=False, error=error)


# ─── Tool Base Class ─────────────────────────────────────────────────────────


class MCPTool(ABC, Generic[TParams]):
    """
    Abstract base class for MCP tools.

    Every tool must define:
    - name: the tool name clients invoke (e.g. 'create_collection')
    - description: for the LLM
    - Params type: pydantic BaseModel for input validation
    - execute(): the implementation, returning an MCPResult with text
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    async def execute(self, params: TParams) -> MCPResult[str]:
        """Execute the tool with validated parameters."""
        ...

    def get_params_model(self) -> type[BaseModel]:
        """Get the Pydantic model class for params validation."""
        for klass in type(self).__mro__:
            for base in getattr(klass, "__orig_bases__", ()):
                args = getattr(base, "__args__", ())
                if args and isinstance(args[0], type) and issubclass(args[0], BaseModel):
                    return args[0]
        raise TypeError(f"Tool {self.name} must specify Generic params type")

    def parse_params(self, arguments: Any) -> TParams:
        """Validate raw arguments; raises ApiError(VALIDATION) on mismatch."""
        return parse_arguments(self.name, self.get_params_model(), arguments)  # type: ignore[return-value]

    def get_input_schema(self) -> dict[str, Any]:
        """Generate JSON Schema from the Pydantic params model."""
        model = self.get_params_model()
        return model.model_json_schema()

    def to_definition(self) -> dict[str, Any]:
        """Generate the MCP tool definition returned by tools/list."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.get_input_schema(),
        }


# ─── Envelope Helpers ────────────────────────────────────────────────────────


def text_content(text: str, is_error: bool = False) -> dict[str, Any]:
    """Build a tools/call result envelope."""
    envelope: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        envelope["isError"] = True
    return envelope


def error_content(message: str) -> dict[str, Any]:
    return text_content(f"Error: {message}", is_error=True)


# ─── MCP Server ──────────────────────────────────────────────────────────────


class MCPServer:
    """
    Base MCP Server.

    Registers tools, handles JSON-RPC over stdio, validates params,
    and dispatches tool calls. Requests are handled one at a time.
    """

    def __init__(self, name: str, version: str, tools: Sequence[MCPTool[Any]]) -> None:
        self.name = name
        self.version = version
        self.tools: dict[str, MCPTool[Any]] = {}

        for tool in tools:
            if tool.name in self.tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self.tools[tool.name] = tool

    async def serve(self) -> None:
        """Main event loop: read stdin, dispatch, write stdout."""
        reader = asyncio.StreamReader(limit=STDIN_LINE_LIMIT)
        protocol = asyncio.StreamReaderProtocol(reader)
        await asyncio.get_running_loop().connect_read_pipe(lambda: protocol, sys.stdin)
        _logger.info("%s %s listening on stdio (%d tools)", self.name, self.version, len(self.tools))
        await self.serve_stream(reader, _write_stdout)

    async def serve_stream(
        self,
        reader: asyncio.StreamReader,
        write: Callable[[dict[str, Any]], None],
    ) -> None:
        """Handle newline-delimited requests from *reader* until EOF."""
        while True:
            try:
                line = await reader.readline()
            except ValueError as e:
                # readline drops the oversized line (or buffer) before raising
                _logger.error("Discarding oversized request line: %s", e)
                write(error_response(None, ErrorCodes.INVALID_REQUEST, "Request line too long"))
                continue
            if not line:
                break  # stdin closed

            line_str = line.decode("utf-8", errors="replace").strip()
            if not line_str:
                continue

            try:
                request = json.loads(line_str)
            except json.JSONDecodeError:
                write(error_response(None, ErrorCodes.PARSE_ERROR, "Invalid JSON"))
                continue

            response = await self.handle_request(request)
            if response is not None:
                write(response)

    async def handle_request(self, raw: Any) -> dict[str, Any] | None:
        """Dispatch a decoded JSON-RPC message; returns None for notifications."""
        request = parse_request(raw)
        if request is None:
            request_id = raw.get("id") if isinstance(raw, dict) else None
            if not isinstance(request_id, (str, int)):
                request_id = None
            return error_response(request_id, ErrorCodes.INVALID_REQUEST, "Invalid request")

        if request.is_notification:
            _logger.debug("Notification received: %s", request.method)
            return None

        params = request.params or {}

        if request.method == "initialize":
            return success_response(request.id, self._build_init_result(params))

        if request.method == "tools/list":
            return success_response(request.id, {"tools": self.list_tools()})

        if request.method == "tools/call":
            result = await self.call_tool(params.get("name", ""), params.get("arguments"))
            return success_response(request.id, result)

        if request.method == "ping":
            return success_response(request.id, {})

        return error_response(
            request.id,
            ErrorCodes.METHOD_NOT_FOUND,
            f"Unknown method: {request.method}",
        )

    def list_tools(self) -> list[dict[str, Any]]:
        return [tool.to_definition() for tool in self.tools.values()]

    async def call_tool(self, tool_name: Any, arguments: Any) -> dict[str, Any]:
        """
        Run one tool invocation and always return a response envelope.

        Unknown tools, invalid arguments, backend failures and unexpected
        exceptions all come back as an isError envelope.
        """
        try:
            tool = self.tools.get(tool_name) if isinstance(tool_name, str) else None
            if tool is None:
                raise MCPError(ErrorCodes.METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")

            params = tool.parse_params(arguments)
            _logger.info("Calling tool %s", tool_name)
            result = await tool.execute(params)
        except MCPError as e:
            _logger.error("Error calling tool %s: %s", tool_name, e)
            return error_content(str(e))
        except Exception as e:
            _logger.exception("Unexpected error calling tool %s", tool_name)
            return error_content(f"Internal error: {e!s}")

        if not result.success:
            message = result.error.message if result.error is not None else "Unknown error"
            _logger.error("Tool %s failed: %s", tool_name, message)
            return error_content(message)

        return text_content(result.data or f"Tool '{tool_name}' executed successfully.")

    def _build_init_result(self, params: dict[str, Any]) -> dict[str, Any]:
        """Build the initialization result payload."""
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str):
            protocol_version = DEFAULT_PROTOCOL_VERSION
        return {
            "protocolVersion": protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self.name, "version": self.version},
        }


def _write_stdout(message: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(message) + "\n")
    sys.stdout.flush()
