"""
Shared fixtures for Vectra MCP server tests.

Runs a fake Vectra API as a real aiohttp application on a local port, so the
client, multipart uploads and status handling are exercised end to end.
Every request the fake receives is recorded for assertions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from vectra_mcp.client import VectraClient
from vectra_mcp.config import Settings
from vectra_mcp.main import build_server
from vectra_mcp.mcp_base import MCPServer

API_KEY = "test-key"

# ─── Fake Backend ────────────────────────────────────────────────────────────


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict[str, str]
    json: Any = None
    form: dict[str, str] = field(default_factory=dict)
    filename: str | None = None


class FakeVectra:
    """
    In-memory stand-in for the Vectra API.

    Uploads whose content contains FAIL are rejected with a 500. Setting
    ``override`` forces every response to the given (status, body).
    """

    def __init__(self) -> None:
        self.requests: list[RecordedRequest] = []
        self.collections: list[dict[str, Any]] = []
        self.files: dict[str, list[dict[str, Any]]] = {}
        self.query_results: list[dict[str, Any]] = []
        self.override: tuple[int, Any] | None = None
        self._next_file = 0
        self.base_url = ""

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/api/collections", self.create_collection)
        app.router.add_get("/api/collections", self.list_collections)
        app.router.add_post("/api/collections/{cid}/files", self.add_file)
        app.router.add_get("/api/collections/{cid}/files", self.list_files)
        app.router.add_post("/api/collections/{cid}/query", self.query)
        app.router.add_delete("/api/files/{fid}", self.delete_file)
        app.router.add_post("/api/files/upload", self.upload)
        app.router.add_get("/api/arangodb/nodes/{key}", self.get_node)
        return app

    def paths(self) -> list[str]:
        return [r.path for r in self.requests]

    async def _record(self, request: web.Request) -> RecordedRequest:
        recorded = RecordedRequest(
            method=request.method,
            path=request.path,
            headers=dict(request.headers),
        )
        if request.content_type == "application/json" and request.can_read_body:
            recorded.json = await request.json()
        self.requests.append(recorded)
        return recorded

    def _overridden(self) -> web.Response | None:
        if self.override is None:
            return None
        status, body = self.override
        if body is None:
            return web.Response(status=status)
        return web.json_response(body, status=status)

    async def create_collection(self, request: web.Request) -> web.Response:
        recorded = await self._record(request)
        if (resp := self._overridden()) is not None:
            return resp
        collection = {"id": f"c{len(self.collections) + 1}", **recorded.json}
        self.collections.append(collection)
        return web.json_response(collection, status=201)

    async def list_collections(self, request: web.Request) -> web.Response:
        await self._record(request)
        if (resp := self._overridden()) is not None:
            return resp
        return web.json_response(self.collections)

    async def add_file(self, request: web.Request) -> web.Response:
        recorded = await self._record(request)
        if (resp := self._overridden()) is not None:
            return resp
        cid = request.match_info["cid"]
        self.files.setdefault(cid, []).append({"id": recorded.json["fileId"], "filename": "doc.txt"})
        return web.json_response({"message": f"File {recorded.json['fileId']} added to collection {cid}."})

    async def list_files(self, request: web.Request) -> web.Response:
        await self._record(request)
        if (resp := self._overridden()) is not None:
            return resp
        files = self.files.get(request.match_info["cid"], [])
        return web.json_response({"status": "success", "data": {"files": files}})

    async def query(self, request: web.Request) -> web.Response:
        await self._record(request)
        if (resp := self._overridden()) is not None:
            return resp
        return web.json_response(self.query_results)

    async def delete_file(self, request: web.Request) -> web.Response:
        await self._record(request)
        if (resp := self._overridden()) is not None:
            return resp
        return web.Response(status=204)

    async def get_node(self, request: web.Request) -> web.Response:
        await self._record(request)
        if (resp := self._overridden()) is not None:
            return resp
        key = request.match_info["key"]
        return web.json_response({"status": "success", "data": {"_key": key, "label": "Entity"}})

    async def upload(self, request: web.Request) -> web.Response:
        recorded = await self._record(request)
        post = await request.post()
        upload = post["file"]
        content = upload.file.read().decode("utf-8")
        recorded.filename = upload.filename
        recorded.form = {k: v for k, v in post.items() if isinstance(v, str)}
        recorded.form["content"] = content
        if (resp := self._overridden()) is not None:
            return resp
        if "FAIL" in content:
            return web.json_response({"message": "Embedding failed"}, status=500)
        self._next_file += 1
        return web.json_response(
            {"status": "success", "data": {"id": f"file-{self._next_file}"}},
            status=201,
        )


# ─── Fixtures ────────────────────────────────────────────────────────────────


@pytest.fixture()
async def backend() -> Any:
    """Start the fake Vectra API and yield it; stopped after each test."""
    fake = FakeVectra()
    server = TestServer(fake.build_app())
    await server.start_server()
    fake.base_url = str(server.make_url("/api"))
    yield fake
    await server.close()


@pytest.fixture()
def settings(backend: FakeVectra) -> Settings:
    return Settings(api_url=backend.base_url, api_key=API_KEY, timeout=10)


@pytest.fixture()
async def client(settings: Settings) -> Any:
    async with VectraClient(settings) as vectra_client:
        yield vectra_client


@pytest.fixture()
def server(client: VectraClient, settings: Settings) -> MCPServer:
    return build_server(client, settings)


@pytest.fixture()
async def unreachable_client() -> Any:
    """A client pointed at a port nothing listens on."""
    dead = Settings(api_url="http://127.0.0.1:9/api", api_key=API_KEY, timeout=5)
    async with VectraClient(dead) as vectra_client:
        yield vectra_client


@pytest.fixture()
def text_files(tmp_path: Path) -> dict[str, Path]:
    """Create sample text files for embed_files tests."""
    a = tmp_path / "a.txt"
    a.write_text("Alpha document about vector search.", encoding="utf-8")
    b = tmp_path / "b.md"
    b.write_text("# Beta\n\nGraph traversal notes.", encoding="utf-8")
    bad = tmp_path / "bad.txt"
    bad.write_text("This upload will FAIL on the backend.", encoding="utf-8")
    binary = tmp_path / "blob.bin"
    binary.write_bytes(b"\xff\xfe\x00\x81")
    return {"a": a, "b": b, "bad": bad, "binary": binary}
