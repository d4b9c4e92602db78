"""
create_collection: create a new Vectra collection.

POST /collections with {name, description?}.
"""

from __future__ import annotations

from pydantic import Field, StrictStr

from ..dispatch import call_api
from ..mcp_base import MCPResult
from ..models import ToolParams
from .base import VectraTool

# ─── Params ──────────────────────────────────────────────────────────────────


class Params(ToolParams):
    """Parameters for create_collection."""

    name: StrictStr = Field(description="Name of the collection")
    description: StrictStr | None = Field(default=None, description="Optional description")


# ─── Tool ────────────────────────────────────────────────────────────────────


class CreateCollection(VectraTool[Params]):
    """Create a new Vectra collection."""

    name = "create_collection"
    description = "Create a new Vectra collection"

    async def execute(self, params: Params) -> MCPResult[str]:
        return await call_api(self.client, "/collections", "post", self.name, params.supplied())
