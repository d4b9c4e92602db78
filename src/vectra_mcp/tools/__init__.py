"""
Vectra tool registry.

Tools (9):
  create_collection         create a new collection
  list_collections          list existing collections
  add_file_to_collection    attach an embedded file to a collection
  list_files_in_collection  list files in a collection
  query_collection          vector / keyword / hybrid search with optional graph expansion
  delete_file               delete a file and its embeddings
  embed_texts               batch-embed raw text items
  embed_files               batch-embed local files
  get_arangodb_node         fetch a knowledge-graph node
"""

from __future__ import annotations

from ..client import VectraClient
from ..config import Settings
from ..mcp_base import MCPTool
from .add_file_to_collection import AddFileToCollection
from .create_collection import CreateCollection
from .delete_file import DeleteFile
from .embed_files import EmbedFiles
from .embed_texts import EmbedTexts
from .get_arangodb_node import GetArangoDbNode
from .list_collections import ListCollections
from .list_files_in_collection import ListFilesInCollection
from .query_collection import QueryCollection

TOOL_CLASSES = (
    CreateCollection,
    ListCollections,
    EmbedTexts,
    EmbedFiles,
    AddFileToCollection,
    ListFilesInCollection,
    QueryCollection,
    DeleteFile,
    GetArangoDbNode,
)


def build_tools(client: VectraClient, settings: Settings) -> tuple[MCPTool, ...]:
    """Instantiate every tool against the shared client and settings."""
    return tuple(tool_class(client, settings) for tool_class in TOOL_CLASSES)


__all__ = ["TOOL_CLASSES", "build_tools"]
