"""Tests for response formatting."""

from __future__ import annotations

from typing import Any

import pytest

from vectra_mcp.formatting import DELETE_SUCCESS, dump_json, format_number, format_response

NESTING_DEPTH = 100_000

TOOL_NAMES = [
    "create_collection",
    "list_collections",
    "add_file_to_collection",
    "list_files_in_collection",
    "query_collection",
    "delete_file",
    "embed_texts",
    "embed_files",
    "get_arangodb_node",
    "not_a_tool",
]

ODD_PAYLOADS: list[Any] = [
    None,
    [],
    {},
    "plain text body",
    0,
    [None, 1, "x", [[]]],
    {"data": None},
    {"data": {"collections": "nope", "files": 3, "results": {"a": 1}}},
    [{"metadata": "not-a-dict", "distance": "far", "score": None}],
    [{"metadata": {"arangodb_neighbors": "x", "arangodb_node": {"k": object()}}}],
]


@pytest.mark.parametrize("tool_name", TOOL_NAMES)
@pytest.mark.parametrize("payload", ODD_PAYLOADS)
def test_formatter_is_total(tool_name: str, payload: Any) -> None:
    """Any payload for any tool yields non-empty text without raising."""
    text = format_response(tool_name, payload)
    assert isinstance(text, str)
    assert text.strip()


# ─── Collections ─────────────────────────────────────────────────────────────


def test_list_collections_empty() -> None:
    assert format_response("list_collections", []) == "No collections found."


def test_list_collections_nested_empty() -> None:
    body = {"status": "success", "data": {"collections": []}}
    assert format_response("list_collections", body) == "No collections found."


def test_list_collections_lines() -> None:
    body = [{"id": "c1", "name": "Docs"}, {"id": "c2", "name": "Notes"}]
    assert format_response("list_collections", body) == (
        "Collections:\n- Docs (ID: c1)\n- Notes (ID: c2)"
    )


def test_create_collection() -> None:
    text = format_response("create_collection", {"id": "c1", "name": "Docs"})
    assert text == 'Created collection "Docs" (ID: c1).'


def test_create_collection_unexpected_shape_falls_back() -> None:
    text = format_response("create_collection", {"ok": True})
    assert text == "Tool 'create_collection' executed successfully."


# ─── Files ───────────────────────────────────────────────────────────────────


def test_add_file_uses_backend_message() -> None:
    assert format_response("add_file_to_collection", {"message": "Added."}) == "Added."
    assert format_response("add_file_to_collection", None) == "File successfully added to collection."


def test_list_files() -> None:
    body = {"data": {"files": [{"id": "f1", "filename": "a.txt"}]}}
    assert format_response("list_files_in_collection", body) == "Files in collection:\n- a.txt (ID: f1)"


def test_list_files_empty() -> None:
    body = {"data": {"files": []}}
    assert format_response("list_files_in_collection", body) == "No files found in this collection."


def test_delete_file_fixed_message() -> None:
    assert format_response("delete_file", None) == DELETE_SUCCESS


# ─── Query ───────────────────────────────────────────────────────────────────


class TestQueryFormatting:
    """Rendering of query_collection results."""

    def test_no_results(self) -> None:
        text = format_response("query_collection", [])
        assert text == "No relevant results found for the query in this collection."

    def test_result_block(self) -> None:
        body = [
            {
                "vector_id": "v1",
                "distance": 0.123456,
                "score": 0.9,
                "metadata": {
                    "chunk_text": "Hybrid search mixes BM25 and vectors.",
                    "excerptKeywords": "hybrid, bm25",
                    "questionsThisExcerptCanAnswer": "What is hybrid search?",
                },
            }
        ]
        text = format_response("query_collection", body)

        assert text.startswith("Query Results:\n### Result 1")
        assert "**Vector ID:** v1" in text
        assert "**Distance:** 0.1235" in text
        assert "**Score:** 0.9000" in text
        assert "```\nHybrid search mixes BM25 and vectors.\n```" in text
        assert "**Keywords:**\nhybrid, bm25" in text
        assert "**Questions Answered:**\nWhat is hybrid search?" in text

    def test_missing_fields_render_na(self) -> None:
        text = format_response("query_collection", [{}])
        assert "**Vector ID:** N/A" in text
        assert "**Distance:** N/A" in text
        assert "No text found" in text

    def test_synthesized_answer_and_graph_blocks(self) -> None:
        body = [
            {
                "synthesized_answer": "Use hybrid mode.",
                "distance": 0,
                "metadata": {
                    "chunk_text": "a",
                    "arangodb_node": {"_key": "n1"},
                    "arangodb_neighbors": [{"_key": "n2"}, {"_key": "n3"}],
                },
            },
            {"distance": 0.5, "metadata": {"chunk_text": "b"}},
        ]
        text = format_response("query_collection", body)

        assert text.startswith("**Synthesized Answer:**\nUse hybrid mode.\n\n---\n\n**Supporting Results:**\n")
        assert "**Distance:** 0.0000" in text
        assert '**ArangoDB Node:**\n```json\n{\n  "_key": "n1"\n}\n```' in text
        assert "**ArangoDB Neighbors (2):**" in text
        assert "\n\n---\n\n### Result 2" in text


# ─── Graph Node / Fallbacks ─────────────────────────────────────────────────


def test_graph_node() -> None:
    text = format_response("get_arangodb_node", {"data": {"_key": "n1"}})
    assert text.startswith("ArangoDB Node Data:\n```json\n")


def test_graph_node_missing_data() -> None:
    text = format_response("get_arangodb_node", {"status": "error"})
    assert text == 'Could not retrieve data for the specified ArangoDB node. Response: {"status": "error"}'


def test_unknown_tool_generic_message() -> None:
    assert format_response("mystery", {"x": 1}) == "Tool 'mystery' executed successfully."


def test_formatting_failure_falls_back_to_raw_dump() -> None:
    class Exploding(dict):
        def get(self, key: Any, default: Any = None) -> Any:
            raise RuntimeError("boom")

    text = format_response("create_collection", Exploding(id="c1"))
    assert text.startswith("Tool 'create_collection' executed, but response formatting failed. Raw data:")


def test_deeply_nested_graph_node_still_formats() -> None:
    """Nesting far past any recursion limit yields fallback text instead of raising."""
    node: dict[str, Any] = {}
    for _ in range(NESTING_DEPTH):
        node = {"child": node}

    text = format_response("get_arangodb_node", {"data": node})

    assert text.startswith("Tool 'get_arangodb_node' executed, but response formatting failed. Raw data:")


def test_dump_json_placeholder_when_repr_fails() -> None:
    nested: list[Any] = []
    for _ in range(NESTING_DEPTH):
        nested = [nested]

    assert dump_json(nested, indent=2) == "<list nested too deeply to display>"


def test_format_number() -> None:
    assert format_number(1) == "1.0000"
    assert format_number(None) == "N/A"
    assert format_number(True) == "N/A"
