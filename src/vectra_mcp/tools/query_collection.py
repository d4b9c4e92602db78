"""
query_collection: search the knowledge base within one collection.

POST /collections/{collectionId}/query. Supports vector / keyword / hybrid
search, metadata include and exclude filters, and graph expansion over the
ArangoDB knowledge graph. A search mode or graph search forced through
configuration overrides whatever the caller sent.
"""

from __future__ import annotations

from typing import Any, Literal
from urllib.parse import quote

from pydantic import Field, StrictBool, StrictStr

from ..config import Settings
from ..dispatch import call_api
from ..mcp_base import MCPResult
from ..models import ExcludeMetadataFilter, IncludeMetadataFilter, Number, PositiveCount, ToolParams
from .base import VectraTool

SearchMode = Literal["vector", "keyword", "hybrid"]
TraversalDirection = Literal["OUTBOUND", "INBOUND", "ANY"]

# ─── Params ──────────────────────────────────────────────────────────────────


class Params(ToolParams):
    """Parameters for query_collection."""

    collection_id: StrictStr = Field(alias="collectionId", description="ID of the collection to query within")
    query_text: StrictStr = Field(alias="queryText", description="The query text to search for")
    limit: PositiveCount | None = Field(default=None, description="Maximum number of results (default 10)")
    search_mode: SearchMode | None = Field(
        default=None, alias="searchMode", description="Search mode (default vector)"
    )
    max_distance: Number | None = Field(
        default=None,
        alias="maxDistance",
        description="Max vector distance (0-2, lower is more similar)",
    )
    include_metadata_filters: list[IncludeMetadataFilter] | None = Field(
        default=None,
        alias="includeMetadataFilters",
        description="Filter results to include only those matching these metadata fields/values",
    )
    exclude_metadata_filters: list[ExcludeMetadataFilter] | None = Field(
        default=None,
        alias="excludeMetadataFilters",
        description="Filter results to exclude those matching these metadata fields/patterns",
    )
    enable_graph_search: StrictBool | None = Field(
        default=None,
        alias="enableGraphSearch",
        description="Expand results through the knowledge graph",
    )
    graph_depth: PositiveCount | None = Field(
        default=None, alias="graphDepth", description="Traversal depth for graph search"
    )
    graph_top_n: PositiveCount | None = Field(
        default=None, alias="graphTopN", description="Number of top results to expand through the graph"
    )
    graph_relationship_types: list[StrictStr] | None = Field(
        default=None,
        alias="graphRelationshipTypes",
        description="Relationship types to follow during traversal",
    )
    graph_traversal_direction: TraversalDirection | None = Field(
        default=None,
        alias="graphTraversalDirection",
        description="Edge direction to follow during traversal",
    )


def build_query_payload(params: Params, settings: Settings) -> dict[str, Any]:
    """Request body for the query endpoint: supplied values minus the path id, plus forced settings."""
    payload = params.model_dump(by_alias=True, exclude_none=True, exclude={"collection_id"})
    if settings.force_search_mode:
        payload["searchMode"] = settings.force_search_mode
    if settings.force_graph_search:
        payload["enableGraphSearch"] = True
    return payload


# ─── Tool ────────────────────────────────────────────────────────────────────


class QueryCollection(VectraTool[Params]):
    """Query the knowledge base within a specific Vectra collection."""

    name = "query_collection"
    description = "Query the knowledge base within a specific Vectra collection"

    async def execute(self, params: Params) -> MCPResult[str]:
        endpoint = f"/collections/{quote(params.collection_id, safe='')}/query"
        payload = build_query_payload(params, self.settings)
        return await call_api(self.client, endpoint, "post", self.name, payload)
