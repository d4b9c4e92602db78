"""list_files_in_collection: GET /collections/{collectionId}/files."""

from __future__ import annotations

from urllib.parse import quote

from pydantic import Field, StrictStr

from ..dispatch import call_api
from ..mcp_base import MCPResult
from ..models import ToolParams
from .base import VectraTool


class Params(ToolParams):
    """Parameters for list_files_in_collection."""

    collection_id: StrictStr = Field(alias="collectionId", description="ID of the collection")


class ListFilesInCollection(VectraTool[Params]):
    """List files within a specific Vectra collection."""

    name = "list_files_in_collection"
    description = "List files within a specific Vectra collection"

    async def execute(self, params: Params) -> MCPResult[str]:
        endpoint = f"/collections/{quote(params.collection_id, safe='')}/files"
        return await call_api(self.client, endpoint, "get", self.name)
