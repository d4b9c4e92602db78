"""
embed_files: read local text files and embed each one.

Files are read as UTF-8 and uploaded one at a time in input order. An
unreadable file (missing, outside VECTRA_ALLOWED_PATHS, not UTF-8) counts as
a failed source; the remaining sources are still processed.
"""

from __future__ import annotations

from pydantic import Field, StrictStr

from ..batch import embed_files
from ..mcp_base import MCPResult
from ..models import Metadata, ToolParams
from ..validation import Sandbox
from .base import VectraTool


class Params(ToolParams):
    """Parameters for embed_files."""

    sources: list[StrictStr] = Field(min_length=1, description="Local file paths to read and embed")
    collection_id: StrictStr | None = Field(
        default=None,
        alias="collectionId",
        description="Optional ID of the collection to add every file to",
    )
    metadata: Metadata | None = Field(
        default=None,
        description="Optional metadata applied to every file (file_path is added per file)",
    )


class EmbedFiles(VectraTool[Params]):
    """Embed multiple local files into Vectra."""

    name = "embed_files"
    description = (
        "Read local text files and embed their content into Vectra, optionally adding "
        "them to a collection"
    )

    async def execute(self, params: Params) -> MCPResult[str]:
        summary = await embed_files(
            self.client,
            params.sources,
            params.collection_id,
            params.metadata,
            sandbox=Sandbox(self.settings.allowed_paths),
        )
        return MCPResult.ok(summary)
