"""
Shared Validation Utilities

Argument parsing for tool calls, path sandboxing for local file sources,
and filename sanitization for uploads.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import ApiError

TModel = TypeVar("TModel", bound=BaseModel)

# ─── Argument Parsing ────────────────────────────────────────────────────────


def parse_arguments(tool_name: str, model: type[TModel], arguments: Any) -> TModel:
    """
    Narrow raw tool arguments into *model*.

    Missing or null arguments are treated as an empty object. Raises an
    ApiError of kind VALIDATION naming the tool on any mismatch.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ApiError.validation(
            f"Invalid arguments for {tool_name}: expected an object, got {type(arguments).__name__}"
        )
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        raise ApiError.validation(f"Invalid arguments for {tool_name}: {describe_errors(e)}") from e


def describe_errors(error: ValidationError) -> str:
    """Render pydantic errors as 'field.path: message' pairs."""
    parts: list[str] = []
    for err in error.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


# ─── Sandbox Validation ──────────────────────────────────────────────────────


class Sandbox:
    """
    Set of directories local file sources must live under.

    An empty sandbox allows every path.
    """

    def __init__(self, paths: list[str] | tuple[str, ...] = ()) -> None:
        self.allowed_paths = [Path(p).resolve() for p in paths if p]

    @property
    def unrestricted(self) -> bool:
        return not self.allowed_paths

    def is_allowed(self, target_path: str) -> bool:
        if self.unrestricted:
            return True
        resolved = Path(target_path).resolve()
        return any(
            resolved == allowed or str(resolved).startswith(str(allowed) + os.sep)
            for allowed in self.allowed_paths
        )

    def check(self, target_path: str) -> None:
        """Raise PermissionError if *target_path* is outside the sandbox."""
        if not self.is_allowed(target_path):
            allowed_str = ", ".join(str(p) for p in self.allowed_paths)
            raise PermissionError(
                f'Path "{Path(target_path).resolve()}" is outside the allowed directories. Allowed: {allowed_str}'
            )


# ─── Input Sanitization ─────────────────────────────────────────────────────


def sanitize_filename(filename: str) -> str:
    """Sanitize a filename to prevent path traversal and invalid characters."""
    sanitized = filename
    sanitized = sanitized.replace("..", "")
    sanitized = re.sub(r'[<>:"|?*\x00/\\]', "", sanitized)
    sanitized = sanitized.strip()
    return sanitized


def looks_like_path(source: str) -> bool:
    """True if *source* contains a path separator."""
    return os.sep in source or "/" in source
