"""
HTTP client for the Vectra API.

Wraps a single aiohttp.ClientSession. Status codes are never turned into
exceptions here: every response, including 4xx/5xx, comes back as an
ApiResponse so callers can inspect the status uniformly. Connection-level
failures (aiohttp.ClientError, asyncio.TimeoutError) propagate unchanged.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import aiohttp

from .config import Settings

_logger = logging.getLogger("vectra.client")

UPLOAD_ENDPOINT = "/files/upload"


@dataclass(frozen=True)
class ApiResponse:
    """Status line plus decoded body (JSON value, raw text, or None when empty)."""

    status: int
    reason: str
    body: Any = None

    @property
    def ok(self) -> bool:
        return self.status < 400

    @property
    def is_empty(self) -> bool:
        return self.body is None


class VectraClient:
    """
    Thin async client bound to one base URL and credential.

    Use as an async context manager so the session is closed on exit:

        async with VectraClient(settings) as client:
            response = await client.request("get", "/collections")
    """

    def __init__(self, settings: Settings, session: aiohttp.ClientSession | None = None) -> None:
        self.base_url = settings.api_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "Accept": "application/json",
        }
        self._timeout = aiohttp.ClientTimeout(total=settings.timeout)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> VectraClient:
        self._ensure_session()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def request(self, method: str, endpoint: str, payload: Any = None) -> ApiResponse:
        """Send a JSON request and return the response whatever its status."""
        session = self._ensure_session()
        kwargs: dict[str, Any] = {"headers": {"Content-Type": "application/json"}}
        if payload is not None:
            kwargs["json"] = payload

        _logger.debug("%s %s", method.upper(), endpoint)
        async with session.request(method.upper(), self.url(endpoint), **kwargs) as resp:
            return await _read_response(resp)

    async def upload(
        self,
        content: str,
        filename: str,
        collection_id: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> ApiResponse:
        """POST *content* as multipart/form-data to the upload endpoint."""
        form = aiohttp.FormData()
        form.add_field(
            "file",
            content.encode("utf-8"),
            filename=filename,
            content_type="text/plain",
        )
        if collection_id:
            form.add_field("collection_id", collection_id)
        for key, value in (metadata or {}).items():
            form.add_field(f"metadata[{key}]", str(value))

        session = self._ensure_session()
        _logger.debug("POST %s (%s, %d chars)", UPLOAD_ENDPOINT, filename, len(content))
        async with session.post(self.url(UPLOAD_ENDPOINT), data=form) as resp:
            return await _read_response(resp)

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self._headers, timeout=self._timeout)
            self._owns_session = True
        return self._session


async def _read_response(resp: aiohttp.ClientResponse) -> ApiResponse:
    raw = await resp.read()
    body: Any = None
    if raw:
        text = raw.decode(resp.charset or "utf-8", errors="replace")
        try:
            body = json.loads(text)
        except json.JSONDecodeError:
            body = text
    return ApiResponse(status=resp.status, reason=resp.reason or "", body=body)
