"""Result reconciliation — Hits back to stored records, in relevance order."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from indexbridge.models.result import RawSearchResult, ReconciledResult

if TYPE_CHECKING:
    from indexbridge.adapters.base.adapter import RecordRepository

logger = logging.getLogger(__name__)


class ResultMapper:
    """Resolves raw hits against a record repository.

    Records are fetched with a single batched ``find_many`` call and then
    re-ordered to match the hits. Hits whose record no longer exists are
    dropped; the remaining records keep their relative order.
    """

    @staticmethod
    def map_ids(results: RawSearchResult) -> list[str]:
        return results.ids

    @staticmethod
    def get_total_count(results: RawSearchResult) -> int:
        return results.total

    async def map(self, results: RawSearchResult, repository: RecordRepository) -> ReconciledResult:
        """Reconcile ``results`` with the records stored in ``repository``."""
        if results.total == 0 or not results.hits:
            return ReconciledResult(total=results.total, page_count=results.page_count)

        keys = results.ids
        records = await repository.find_many(keys)
        by_key = {str(record.get_key()): record for record in records}

        ordered = []
        missing: list[str] = []
        for key in keys:
            record = by_key.get(key)
            if record is None:
                missing.append(key)
            else:
                ordered.append(record)

        if missing:
            logger.debug("Dropped %d hits with no stored record: %s", len(missing), missing)

        return ReconciledResult(
            records=ordered,
            total=results.total,
            page_count=results.page_count,
            missing_ids=missing,
        )
