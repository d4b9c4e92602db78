"""
Response formatting: Vectra API payloads to human-readable text.

format_response() is total. Unknown tools and unrecognised payload shapes
fall back to a generic success line; any exception raised while rendering is
logged and replaced by a fallback that dumps the raw payload.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

_logger = logging.getLogger("vectra.formatting")

DELETE_SUCCESS = "File deleted successfully."
ADD_FILE_SUCCESS = "File successfully added to collection."

# ─── Public API ──────────────────────────────────────────────────────────────


def format_response(tool_name: str, body: Any) -> str:
    """Render *body* (the decoded API response) for *tool_name*."""
    default = f"Tool '{tool_name}' executed successfully."
    formatter = _FORMATTERS.get(tool_name)
    if formatter is None:
        return default

    try:
        summary = formatter(body)
    except Exception:
        _logger.exception("Error formatting response for %s", tool_name)
        return f"Tool '{tool_name}' executed, but response formatting failed. Raw data: {dump_json(body)}"

    return summary or default


def dump_json(value: Any, indent: int | None = None) -> str:
    """json.dumps that never raises; falls back to repr(), then to a type placeholder."""
    try:
        return json.dumps(value, indent=indent, default=str)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return repr(value)
    except RecursionError:
        return f"<{type(value).__name__} nested too deeply to display>"


def format_number(value: Any) -> str:
    """Round a distance or score to 4 decimals, or 'N/A' when absent."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "N/A"
    return f"{value:.4f}"


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _get(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _nested(obj: Any, *keys: str) -> Any:
    for key in keys:
        obj = _get(obj, key)
    return obj


def _first_list(*candidates: Any) -> list[Any] | None:
    for candidate in candidates:
        if isinstance(candidate, list):
            return candidate
    return None


def _json_block(value: Any) -> str:
    return f"```json\n{dump_json(value, indent=2)}\n```"


# ─── Per-tool Formatters ─────────────────────────────────────────────────────


def _format_list_collections(body: Any) -> str | None:
    collections = _first_list(body, _nested(body, "data", "collections"), _get(body, "collections"))
    if collections is None:
        return None
    if not collections:
        return "No collections found."
    lines = [f"- {_get(col, 'name')} (ID: {_get(col, 'id')})" for col in collections]
    return "Collections:\n" + "\n".join(lines)


def _format_create_collection(body: Any) -> str | None:
    for record in (body, _get(body, "data")):
        if _get(record, "id") and _get(record, "name"):
            return f'Created collection "{record["name"]}" (ID: {record["id"]}).'
    return None


def _format_add_file(body: Any) -> str:
    message = _get(body, "message")
    return message if isinstance(message, str) and message else ADD_FILE_SUCCESS


def _format_list_files(body: Any) -> str | None:
    files = _first_list(_nested(body, "data", "files"), _get(body, "files"), body)
    if files is None:
        return None
    if not files:
        return "No files found in this collection."
    lines = [f"- {_get(f, 'filename')} (ID: {_get(f, 'id')})" for f in files]
    return "Files in collection:\n" + "\n".join(lines)


def _format_query_result(index: int, result: Any) -> str:
    metadata = _get(result, "metadata")
    if not isinstance(metadata, dict):
        metadata = {}

    parts = [f"### Result {index}"]
    parts.append(f"**Vector ID:** {_get(result, 'vector_id') or 'N/A'}")
    parts.append(f"**Distance:** {format_number(_get(result, 'distance'))}")
    parts.append(f"**Score:** {format_number(_get(result, 'score'))}")
    parts.append(f"**Text:**\n```\n{metadata.get('chunk_text') or 'No text found'}\n```")

    keywords = metadata.get("excerptKeywords")
    if keywords:
        parts.append(f"**Keywords:**\n{keywords}")
    questions = metadata.get("questionsThisExcerptCanAnswer")
    if questions:
        parts.append(f"**Questions Answered:**\n{questions}")

    node = metadata.get("arangodb_node")
    if node:
        parts.append(f"**ArangoDB Node:**\n{_json_block(node)}")
    neighbors = metadata.get("arangodb_neighbors")
    if isinstance(neighbors, list) and neighbors:
        parts.append(f"**ArangoDB Neighbors ({len(neighbors)}):**\n{_json_block(neighbors)}")

    return "\n\n".join(parts)


def _format_query_collection(body: Any) -> str | None:
    results = _first_list(body, _nested(body, "data", "results"), _get(body, "data"), _get(body, "results"))
    if results is None:
        return None
    if not results:
        return "No relevant results found for the query in this collection."

    answer = _get(results[0], "synthesized_answer")
    if answer:
        header = f"**Synthesized Answer:**\n{answer}\n\n---\n\n**Supporting Results:**\n"
    else:
        header = "Query Results:\n"

    blocks = [_format_query_result(i, res) for i, res in enumerate(results, start=1)]
    return header + "\n\n---\n\n".join(blocks)


def _format_delete_file(body: Any) -> str:
    return DELETE_SUCCESS


def _format_graph_node(body: Any) -> str:
    node = _get(body, "data")
    if node:
        return f"ArangoDB Node Data:\n{_json_block(node)}"
    return f"Could not retrieve data for the specified ArangoDB node. Response: {dump_json(body)}"


_FORMATTERS: dict[str, Callable[[Any], str | None]] = {
    "list_collections": _format_list_collections,
    "create_collection": _format_create_collection,
    "add_file_to_collection": _format_add_file,
    "list_files_in_collection": _format_list_files,
    "query_collection": _format_query_collection,
    "delete_file": _format_delete_file,
    "get_arangodb_node": _format_graph_node,
}
