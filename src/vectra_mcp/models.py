"""
Shared Pydantic models for tool arguments.

Field names are snake_case in Python and camelCase on the wire (aliases),
matching what MCP clients send. Primitive fields are strict so that "5" is
not silently accepted where a number is expected.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr, model_validator


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


def _require_whole_number(value: Any) -> Any:
    value = _require_number(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("must be a whole number")
        return int(value)
    return value


Number = Annotated[float, BeforeValidator(_require_number)]
# 5 and 5.0 are both accepted and normalised to int
PositiveCount = Annotated[int, BeforeValidator(_require_whole_number), Field(ge=1)]
Metadata = dict[str, StrictStr]


class ToolParams(BaseModel):
    """Base for every tool's argument model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def supplied(self) -> dict[str, Any]:
        """Return exactly the fields the caller supplied, under their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


# ─── Metadata Filters ────────────────────────────────────────────────────────


class IncludeMetadataFilter(BaseModel):
    """Keep only results whose metadata *field* equals *value*."""

    field: StrictStr = Field(description="Metadata field name")
    value: StrictStr = Field(description="Exact value to match")


class ExcludeMetadataFilter(BaseModel):
    """Drop results whose metadata *field* equals *value* or matches *pattern*."""

    field: StrictStr = Field(description="Metadata field name")
    value: StrictStr | None = Field(default=None, description="Exact value to exclude")
    pattern: StrictStr | None = Field(
        default=None, description="LIKE pattern to exclude (e.g. %value%)"
    )

    @model_validator(mode="after")
    def _value_or_pattern(self) -> ExcludeMetadataFilter:
        if self.value is None and self.pattern is None:
            raise ValueError("exclude filter requires 'value' or 'pattern'")
        return self


# ─── Batch Items ─────────────────────────────────────────────────────────────


class TextItem(BaseModel):
    """One raw text item for embed_texts."""

    text: StrictStr = Field(description="Text content to embed")
    metadata: Metadata | None = Field(
        default=None,
        description="Optional string metadata (e.g. source_url, file_path, title)",
    )
