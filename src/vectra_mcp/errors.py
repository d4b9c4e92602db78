"""
Error taxonomy for the Vectra MCP server.

MCPError carries a JSON-RPC error code and is what the router understands.
Every failure a tool can report is an ApiError tagged with its kind:
  VALIDATION: the tool arguments did not match the schema (no request sent)
  STATUS:     the backend answered with an HTTP status >= 400
  TRANSPORT:  no response was received at all (DNS, refused, timeout)

Response formatting failures never surface here; the formatter absorbs them.
"""

from __future__ import annotations

import enum


class MCPError(Exception):
    """Structured error for MCP tool failures."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


class ErrorCodes:
    """Standard JSON-RPC / MCP error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    STATUS = "status"
    TRANSPORT = "transport"


class ApiError(MCPError):
    """A normalized failure carrying enough context for one user-visible line."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: str | None = None,
        status: int | None = None,
    ) -> None:
        code = ErrorCodes.INVALID_PARAMS if kind is ErrorKind.VALIDATION else ErrorCodes.INTERNAL_ERROR
        super().__init__(code, message)
        self.kind = kind
        self.message = message
        self.details = details
        self.status = status

    @classmethod
    def validation(cls, message: str) -> ApiError:
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def from_status(cls, status: int, message: str, details: str | None = None) -> ApiError:
        return cls(ErrorKind.STATUS, message, details=details, status=status)

    @classmethod
    def transport(cls, message: str, details: str | None = None) -> ApiError:
        return cls(ErrorKind.TRANSPORT, message, details=details)


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing or invalid."""
