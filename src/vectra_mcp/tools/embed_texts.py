"""
embed_texts: embed a batch of raw text items.

Each item is uploaded on its own (multipart POST /files/upload) in input
order. Failures are isolated per item and reported in the summary.
"""

from __future__ import annotations

from pydantic import Field, StrictStr

from ..batch import embed_texts
from ..mcp_base import MCPResult
from ..models import TextItem, ToolParams
from .base import VectraTool


class Params(ToolParams):
    """Parameters for embed_texts."""

    items: list[TextItem] = Field(min_length=1, description="Text items to embed, each with optional metadata")
    collection_id: StrictStr | None = Field(
        default=None,
        alias="collectionId",
        description="Optional ID of the collection to add every item to",
    )


class EmbedTexts(VectraTool[Params]):
    """Embed multiple text items into Vectra."""

    name = "embed_texts"
    description = (
        "Embed multiple raw text items into Vectra, optionally adding them to a collection. "
        "Metadata such as source_url or file_path is stored with each item."
    )

    async def execute(self, params: Params) -> MCPResult[str]:
        summary = await embed_texts(self.client, params.items, params.collection_id)
        return MCPResult.ok(summary)
