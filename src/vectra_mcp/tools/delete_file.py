"""
delete_file: delete a file and its embeddings.

DELETE /files/{fileId}. The API answers 204 No Content on success.
"""

from __future__ import annotations

from urllib.parse import quote

from pydantic import Field, StrictStr

from ..dispatch import call_api
from ..mcp_base import MCPResult
from ..models import ToolParams
from .base import VectraTool


class Params(ToolParams):
    """Parameters for delete_file."""

    file_id: StrictStr = Field(alias="fileId", description="ID of the file to delete")


class DeleteFile(VectraTool[Params]):
    """Delete a file and its embeddings from Vectra."""

    name = "delete_file"
    description = "Delete a file and its embeddings from Vectra"

    async def execute(self, params: Params) -> MCPResult[str]:
        endpoint = f"/files/{quote(params.file_id, safe='')}"
        return await call_api(self.client, endpoint, "delete", self.name)
