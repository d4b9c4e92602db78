"""list_collections: list existing Vectra collections (GET /collections)."""

from __future__ import annotations

from ..dispatch import call_api
from ..mcp_base import MCPResult
from ..models import ToolParams
from .base import VectraTool


class Params(ToolParams):
    """list_collections takes no arguments."""


class ListCollections(VectraTool[Params]):
    """List existing Vectra collections."""

    name = "list_collections"
    description = "List existing Vectra collections"

    async def execute(self, params: Params) -> MCPResult[str]:
        return await call_api(self.client, "/collections", "get", self.name)
