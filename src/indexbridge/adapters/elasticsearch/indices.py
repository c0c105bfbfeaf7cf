"""Index administration — Existence, creation, deletion and mappings.

Every call is one round trip to the indices API. Nothing is retried; a
rejected or failed call raises ``IndexAdminError`` with the backend's cause.
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import ApiError, TransportError

from indexbridge.adapters.base.exceptions import IndexAdminError
from indexbridge.adapters.elasticsearch.responses import response_body, transport_cause
from indexbridge.models.index import IndexDescriptor

logger = logging.getLogger(__name__)


class IndexManager:
    """Thin wrapper over ``client.indices``.

    Args:
        client: An ``AsyncElasticsearch`` (or compatible) client.
        include_type_name: Wrap mappings in their document type name.
    """

    def __init__(self, client: Any, include_type_name: bool = True) -> None:
        self._client = client
        self._include_type_name = include_type_name

    async def exists(self, index: str) -> bool:
        try:
            return bool(await self._client.indices.exists(index=index))
        except (ApiError, TransportError) as e:
            raise _admin_error("exists", index, e) from e

    async def create(self, index: str) -> dict[str, Any]:
        try:
            response = await self._client.indices.create(index=index)
        except (ApiError, TransportError) as e:
            raise _admin_error("create", index, e) from e
        logger.info("Created index %s", index)
        return response_body(response)

    async def delete(self, index: str) -> dict[str, Any]:
        try:
            response = await self._client.indices.delete(index=index)
        except (ApiError, TransportError) as e:
            raise _admin_error("delete", index, e) from e
        logger.info("Deleted index %s", index)
        return response_body(response)

    async def put_mapping(self, index: str, type_name: str, mapping: dict[str, dict[str, Any]]) -> dict[str, Any]:
        """Replace the field mapping of ``type_name`` in ``index``."""
        body: dict[str, Any] = {"properties": mapping}
        if self._include_type_name:
            body = {type_name: body}

        try:
            response = await self._client.indices.put_mapping(index=index, body=body)
        except (ApiError, TransportError) as e:
            raise _admin_error("put_mapping", index, e) from e
        logger.info("Updated mapping of %s/%s (%d fields)", index, type_name, len(mapping))
        return response_body(response)

    async def ensure(self, descriptor: IndexDescriptor) -> bool:
        """Create ``descriptor``'s index if absent, then apply its mapping.

        Returns:
            True if the index was created by this call.
        """
        created = False
        if not await self.exists(descriptor.name):
            await self.create(descriptor.name)
            created = True
        if descriptor.mapping:
            await self.put_mapping(descriptor.name, descriptor.type_name, descriptor.mapping)
        return created


def _admin_error(operation: str, index: str, error: Exception) -> IndexAdminError:
    if isinstance(error, ApiError):
        return IndexAdminError(
            f"Index {operation} on '{index}' failed: {error}",
            status=error.meta.status,
            cause=error.body,
        )
    cause = transport_cause(error) if isinstance(error, TransportError) else str(error)
    return IndexAdminError(f"Index {operation} on '{index}' failed: {cause}", cause=cause)
