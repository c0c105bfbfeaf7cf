"""Bulk operation models — Upserts and deletes destined for one bulk call."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class _Operation(BaseModel):
    model_config = {"frozen": True}

    id: str = Field(description="Document id")
    index: str = Field(description="Target index")
    type: str = Field(description="Document type name")

    def action_line(self, include_type_name: bool = True) -> dict[str, Any]:
        meta: dict[str, Any] = {"_id": self.id, "_index": self.index}
        if include_type_name:
            meta["_type"] = self.type
        return {self.action: meta}  # type: ignore[attr-defined]


class UpsertOperation(_Operation):
    """Insert the document, or merge it into an existing one."""

    action: Literal["update"] = "update"
    document: dict[str, Any] = Field(default_factory=dict, description="Searchable representation")

    def lines(self, include_type_name: bool = True) -> tuple[dict[str, Any], ...]:
        return (
            self.action_line(include_type_name),
            {"doc": self.document, "doc_as_upsert": True},
        )


class DeleteOperation(_Operation):
    """Remove the document from the index."""

    action: Literal["delete"] = "delete"

    def lines(self, include_type_name: bool = True) -> tuple[dict[str, Any], ...]:
        return (self.action_line(include_type_name),)


BulkOperation = Annotated[UpsertOperation | DeleteOperation, Field(discriminator="action")]


class BulkBatch(BaseModel):
    """A fully built bulk payload: action lines, each upsert followed by its document."""

    model_config = {"frozen": True}

    lines: tuple[dict[str, Any], ...] = Field(default=(), description="Wire lines in execution order")
    operation_count: int = Field(default=0, description="Number of logical operations")

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return self.operation_count == 0
