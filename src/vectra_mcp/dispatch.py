"""
Single-call dispatcher.

Performs one HTTP exchange for a tool and returns an MCPResult: formatted
text on success, or an ApiError of kind STATUS / TRANSPORT on failure.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .client import ApiResponse, VectraClient
from .errors import ApiError
from .formatting import dump_json, format_response
from .mcp_base import MCPResult

_logger = logging.getLogger("vectra.dispatch")

MAX_DETAILS_LENGTH = 500

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


async def call_api(
    client: VectraClient,
    endpoint: str,
    method: str,
    tool_name: str,
    payload: Any = None,
) -> MCPResult[str]:
    """Send one request and format the response for *tool_name*."""
    try:
        response = await client.request(method, endpoint, payload)
    except TRANSPORT_ERRORS as e:
        return MCPResult.fail(transport_error(tool_name, method, endpoint, e))

    if not response.ok:
        return MCPResult.fail(status_error(method, endpoint, response))

    if method.lower() == "delete" and response.is_empty:
        return MCPResult.ok(format_response(tool_name, None))

    return MCPResult.ok(format_response(tool_name, response.body))


def status_error(method: str, endpoint: str, response: ApiResponse) -> ApiError:
    """Build the STATUS error for a response with status >= 400."""
    message = f"API Error: {response.status} {response.reason}".rstrip()
    body_message = response.body.get("message") if isinstance(response.body, dict) else None
    if body_message:
        message = f"{message} - {body_message}"

    serialized = dump_json(response.body)
    _logger.error(
        "API Error calling %s %s: Status %d %s",
        method.upper(),
        endpoint,
        response.status,
        serialized,
    )

    details = None
    if response.body is not None and len(serialized) < MAX_DETAILS_LENGTH:
        details = serialized
        message = f"{message} | Details: {serialized}"

    return ApiError.from_status(response.status, message, details=details)


def transport_error(tool_name: str, method: str, endpoint: str, exc: BaseException) -> ApiError:
    """Build the TRANSPORT error for a request that got no response."""
    _logger.error("Network error calling %s %s: %r", method.upper(), endpoint, exc)

    cause = str(exc) or type(exc).__name__
    message = f"Failed to communicate with Vectra API during {tool_name}: {cause}"

    details = None
    if isinstance(exc, aiohttp.ClientResponseError) and exc.message:
        details = f"{exc.status} {exc.message}"
        if len(details) < MAX_DETAILS_LENGTH:
            message = f"{message} | Details: {details}"

    return ApiError.transport(message, details=details)
