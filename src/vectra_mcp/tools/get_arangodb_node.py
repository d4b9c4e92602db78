"""get_arangodb_node: fetch one knowledge-graph node by key (GET /arangodb/nodes/{nodeKey})."""

from __future__ import annotations

from urllib.parse import quote

from pydantic import Field, StrictStr

from ..dispatch import call_api
from ..mcp_base import MCPResult
from ..models import ToolParams
from .base import VectraTool


class Params(ToolParams):
    """Parameters for get_arangodb_node."""

    node_key: StrictStr = Field(alias="nodeKey", description="Key of the ArangoDB node to retrieve")


class GetArangoDbNode(VectraTool[Params]):
    """Retrieve a node from the Vectra knowledge graph."""

    name = "get_arangodb_node"
    description = "Retrieve the data of a specific node from the Vectra knowledge graph (ArangoDB)"

    async def execute(self, params: Params) -> MCPResult[str]:
        endpoint = f"/arangodb/nodes/{quote(params.node_key, safe='')}"
        return await call_api(self.client, endpoint, "get", self.name)
