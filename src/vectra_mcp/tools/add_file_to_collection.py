"""
add_file_to_collection: attach an already embedded file to a collection.

POST /collections/{collectionId}/files with {fileId}.
"""

from __future__ import annotations

from urllib.parse import quote

from pydantic import Field, StrictStr

from ..dispatch import call_api
from ..mcp_base import MCPResult
from ..models import ToolParams
from .base import VectraTool


class Params(ToolParams):
    """Parameters for add_file_to_collection."""

    collection_id: StrictStr = Field(alias="collectionId", description="ID of the target collection")
    file_id: StrictStr = Field(alias="fileId", description="ID of the file (obtained after embedding)")


class AddFileToCollection(VectraTool[Params]):
    """Add an embedded file to a Vectra collection."""

    name = "add_file_to_collection"
    description = "Add an embedded file to a Vectra collection"

    async def execute(self, params: Params) -> MCPResult[str]:
        endpoint = f"/collections/{quote(params.collection_id, safe='')}/files"
        return await call_api(self.client, endpoint, "post", self.name, {"fileId": params.file_id})
