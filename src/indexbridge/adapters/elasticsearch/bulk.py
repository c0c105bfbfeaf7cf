"""Bulk batching — Upserts and deletes folded into one bulk payload.

The bulk endpoint takes alternating lines: an action line naming the
document, followed by a document line for updates only. Operations run in
payload order, so the payload keeps the caller's order exactly.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import chain
from typing import TYPE_CHECKING

from indexbridge.models.bulk import BulkBatch, BulkOperation, DeleteOperation, UpsertOperation

if TYPE_CHECKING:
    from indexbridge.adapters.base.adapter import Searchable
    from indexbridge.adapters.elasticsearch.resolver import IndexResolver


class BulkBatchBuilder:
    """Builds complete ``BulkBatch`` values before anything is sent.

    Args:
        include_type_name: Write ``_type`` into action lines.
    """

    def __init__(self, include_type_name: bool = True) -> None:
        self._include_type_name = include_type_name

    @staticmethod
    def upserts(records: Iterable[Searchable], resolver: IndexResolver) -> list[UpsertOperation]:
        return [
            UpsertOperation(
                id=str(record.get_key()),
                index=resolver.resolve_record(record),
                type=record.searchable_as(),
                document=record.to_searchable_array(),
            )
            for record in records
        ]

    @staticmethod
    def deletes(records: Iterable[Searchable], resolver: IndexResolver) -> list[DeleteOperation]:
        return [
            DeleteOperation(
                id=str(record.get_key()),
                index=resolver.resolve_record(record),
                type=record.searchable_as(),
            )
            for record in records
        ]

    def build(self, operations: Sequence[BulkOperation]) -> BulkBatch:
        """Fold ``operations`` into one batch, preserving their order."""
        return BulkBatch(
            lines=tuple(chain.from_iterable(op.lines(self._include_type_name) for op in operations)),
            operation_count=len(operations),
        )
