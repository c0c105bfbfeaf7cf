"""Index descriptor model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class IndexDescriptor(BaseModel):
    """An index together with the document type it holds and that type's mapping."""

    name: str = Field(description="Physical index name")
    type_name: str = Field(description="Document type name")
    mapping: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Field name -> type metadata, e.g. {'title': {'type': 'text'}}",
    )
