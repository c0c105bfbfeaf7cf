"""Index resolution — Which physical index a searchable type lives in.

Two strategies:
  - ``GlobalIndex``: every type shares one configured index
  - ``PerTypeIndex``: each type lives in the index named after it
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from indexbridge.adapters.base.adapter import Searchable
    from indexbridge.config.settings import IndexSettings


class IndexResolver(Protocol):
    def resolve(self, type_name: str) -> str: ...

    def resolve_record(self, record: Searchable) -> str: ...


@dataclass(frozen=True)
class GlobalIndex:
    """All types resolve to one shared index."""

    name: str

    def resolve(self, type_name: str) -> str:
        return self.name

    def resolve_record(self, record: Searchable) -> str:
        return self.name


@dataclass(frozen=True)
class PerTypeIndex:
    """Each type resolves to its own ``searchable_as()`` name."""

    def resolve(self, type_name: str) -> str:
        return type_name

    def resolve_record(self, record: Searchable) -> str:
        return record.searchable_as()


def resolver_from_settings(settings: IndexSettings) -> IndexResolver:
    """Pick the resolution strategy for the configured index mode."""
    if settings.per_type_index:
        return PerTypeIndex()
    return GlobalIndex(settings.name)
