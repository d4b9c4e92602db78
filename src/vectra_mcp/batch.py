"""
Batch ingestion: embed many text items or local files in one tool call.

Items are processed strictly in input order, one upload at a time. A failing
item (unreadable file, rejected upload, network error) is recorded and the
loop moves on; the batch itself only fails if its arguments are invalid,
which is checked before the loop starts.
"""

from __future__ import annotations

import json
import logging
import os
import re
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .client import UPLOAD_ENDPOINT, VectraClient
from .dispatch import TRANSPORT_ERRORS, status_error, transport_error
from .mcp_base import MCPResult
from .models import TextItem
from .validation import Sandbox, looks_like_path, sanitize_filename

_logger = logging.getLogger("vectra.batch")

FILE_ID_PATTERN = re.compile(r"File ID: ([\w.-]+)")
TEXT_ITEM_PLACEHOLDER = "batch-text-item.txt"
DEFAULT_STEM = "embedded-content"

# ─── Result Accumulator ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class BatchItemResult:
    """Outcome of one batch item: a file id on success, an error otherwise."""

    source: str
    file_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchSummary:
    """Ordered per-item results plus the wording used to render them."""

    title: str
    noun: str
    failure_label: str
    results: list[BatchItemResult] = field(default_factory=list)

    def add(self, result: BatchItemResult) -> None:
        self.results.append(result)

    @property
    def succeeded(self) -> list[BatchItemResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[BatchItemResult]:
        return [r for r in self.results if not r.ok]

    def render(self) -> str:
        succeeded = self.succeeded
        failed = self.failed
        lines = [
            f"{self.title} {len(succeeded)} {self.noun} succeeded, {len(failed)} {self.noun} failed."
        ]
        file_ids = [r.file_id for r in succeeded if r.file_id]
        if file_ids:
            lines.append("Successful File IDs: " + ", ".join(file_ids))
        if failed:
            lines.append(
                f"{self.failure_label}: " + ", ".join(f"{r.source} ({r.error})" for r in failed)
            )
        return "\n".join(lines)


# ─── Single-item Upload ──────────────────────────────────────────────────────


def build_upload_filename(source: str, millis: int | None = None) -> str:
    """Derive a unique upload filename: '<stem>-<millis><ext>' (ext defaults to .txt)."""
    if millis is None:
        millis = int(time.time() * 1000)
    name = os.path.basename(source) if looks_like_path(source) else source
    stem, ext = os.path.splitext(sanitize_filename(name))
    return f"{stem or DEFAULT_STEM}-{millis}{ext or '.txt'}"


def extract_file_id(text: str | None) -> str | None:
    """Pull the id out of an upload success message ('... File ID: <id>')."""
    if not text:
        return None
    match = FILE_ID_PATTERN.search(text)
    return match.group(1) if match else None


async def upload_content(
    client: VectraClient,
    content: str,
    source: str,
    collection_id: str | None = None,
    metadata: Mapping[str, str] | None = None,
    tool_name: str = "embed_texts",
) -> MCPResult[str]:
    """
    Upload one piece of content to /files/upload.

    *source* is a file path, URL or placeholder name. It seeds the upload
    filename and, when the metadata carries neither ``source_url`` nor
    ``file_path``, is added as one of them.
    """
    final_metadata = dict(metadata or {})
    if not final_metadata.get("source_url") and not final_metadata.get("file_path"):
        if source.startswith(("http://", "https://")):
            final_metadata["source_url"] = source
        elif looks_like_path(source):
            final_metadata["file_path"] = source

    description = final_metadata.get("file_path") or final_metadata.get("source_url") or source
    filename = build_upload_filename(source)

    try:
        response = await client.upload(content, filename, collection_id, final_metadata)
    except TRANSPORT_ERRORS as e:
        return MCPResult.fail(transport_error(tool_name, "post", UPLOAD_ENDPOINT, e))

    if not response.ok:
        return MCPResult.fail(status_error("post", UPLOAD_ENDPOINT, response))

    summary = f'Successfully uploaded content from "{description}". Embedding is pending.'
    file_id = _uploaded_file_id(response.body)
    if file_id:
        summary += f" File ID: {file_id}"
    if final_metadata:
        summary += f"\nMetadata: {json.dumps(final_metadata)}"
    return MCPResult.ok(summary)


def _uploaded_file_id(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    file_id = data.get("id") if isinstance(data, dict) else None
    file_id = file_id or body.get("id")
    return str(file_id) if file_id else None


# ─── Batch Orchestration ─────────────────────────────────────────────────────


async def embed_texts(
    client: VectraClient,
    items: Sequence[TextItem],
    collection_id: str | None = None,
) -> str:
    """Upload each text item in order and summarize successes and failures."""
    summary = BatchSummary("Batch embed completed.", "items", "Failed items")
    _logger.info("Starting batch embed of %d items...", len(items))

    for index, item in enumerate(items, start=1):
        metadata = dict(item.metadata or {})
        source = metadata.get("source_url") or metadata.get("file_path") or f"text item {index}"
        result = await _upload_item(
            client, item.text, TEXT_ITEM_PLACEHOLDER, source, collection_id, metadata, "embed_texts"
        )
        summary.add(result)

    _logger.info(
        "Batch embed finished: %d succeeded, %d failed",
        len(summary.succeeded),
        len(summary.failed),
    )
    return summary.render()


async def embed_files(
    client: VectraClient,
    sources: Sequence[str],
    collection_id: str | None = None,
    metadata: Mapping[str, str] | None = None,
    sandbox: Sandbox | None = None,
) -> str:
    """Read each local file in order, upload it, and summarize the outcome."""
    summary = BatchSummary("Batch embed files completed.", "sources", "Failed sources")
    sandbox = sandbox or Sandbox()
    _logger.info("Starting batch embed of %d sources...", len(sources))

    for source in sources:
        item_metadata = {**(metadata or {}), "file_path": source}
        try:
            content = read_source(source, sandbox)
        except (OSError, ValueError) as e:
            message = f'Failed to read file "{source}": {e}'
            _logger.error(message)
            summary.add(BatchItemResult(source=source, error=message))
            continue

        _logger.info("Read content from file: %s", source)
        result = await _upload_item(
            client, content, source, source, collection_id, item_metadata, "embed_files"
        )
        summary.add(result)

    _logger.info(
        "Batch embed files finished: %d succeeded, %d failed",
        len(summary.succeeded),
        len(summary.failed),
    )
    return summary.render()


def read_source(path: str, sandbox: Sandbox) -> str:
    """Read a UTF-8 text file after checking it against the sandbox."""
    sandbox.check(path)
    with open(path, encoding="utf-8") as fh:
        return fh.read()


async def _upload_item(
    client: VectraClient,
    content: str,
    upload_source: str,
    description: str,
    collection_id: str | None,
    metadata: Mapping[str, str],
    tool_name: str,
) -> BatchItemResult:
    try:
        outcome = await upload_content(
            client, content, upload_source, collection_id, metadata, tool_name=tool_name
        )
    except Exception as e:
        _logger.exception("Unexpected error processing %s", description)
        return BatchItemResult(source=description, error=str(e) or type(e).__name__)

    if not outcome.success:
        message = outcome.error.message if outcome.error is not None else "Unknown error"
        _logger.error("Error processing %s: %s", description, message)
        return BatchItemResult(source=description, error=message)

    file_id = extract_file_id(outcome.data)
    _logger.info("Processed %s (File ID: %s)", description, file_id or "N/A")
    return BatchItemResult(source=description, file_id=file_id)
