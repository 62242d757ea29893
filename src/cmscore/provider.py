"""Subtree controller that buffers changes until deploy."""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List

from .client import DataClient
from .errors import EntityNotFound, SchemaError


ChangeCallback = Callable[[Dict[str, Any]], None]

logger = logging.getLogger("cms.provider")


def _noop(_: Dict[str, Any]) -> None:
    return None


class Provider:
    """Holds pending edits per entity and writes them through the client.

    Pending changes for array entities are keyed by record id; changes for
    object entities are kept under ``None``.
    """

    def __init__(
        self,
        client: DataClient,
        schema: Dict[str, Any] | None = None,
        root_key: str | None = None,
        data_did_change: ChangeCallback | None = None,
        after_deploy: ChangeCallback | None = None,
    ) -> None:
        self.client = client
        self.schema = schema if schema is not None else client.schema
        self.root_key = root_key
        self._data_did_change = data_did_change or _noop
        self._after_deploy = after_deploy or _noop
        self._pending: Dict[str, Dict[str | None, dict]] = {}

    def pending(self, key: str | None = None) -> Dict[str, Any]:
        if key is not None:
            return copy.deepcopy(self._pending.get(key, {}))
        return copy.deepcopy(self._pending)

    def stage(self, key: str, changes: dict, record_id: str | None = None) -> None:
        entity = self.schema.get(key)
        if entity is None:
            raise EntityNotFound(message="entity not in schema", key=key)
        is_array = isinstance(entity, dict) and entity.get("type") == "array"
        if is_array and record_id is None:
            raise SchemaError(message="list entity changes require a record id", code="RECORD_ID_REQUIRED", path=key)
        if not is_array and record_id is not None:
            raise SchemaError(message="object entity changes take no record id", code="RECORD_ID_NOT_ALLOWED", path=key)
        bucket = self._pending.setdefault(key, {})
        bucket.setdefault(record_id, {}).update(copy.deepcopy(changes))
        self._data_did_change(self.pending())

    async def deploy(self, key: str, record_id: str | None = None) -> None:
        bucket = self._pending.get(key, {})
        targets = [record_id] if record_id is not None else list(bucket.keys())
        results: List[Any] = []
        try:
            for target in targets:
                changes = bucket.get(target)
                if changes is None:
                    continue
                if target is None:
                    results.append(self.client.set(key, changes))
                else:
                    results.append(self.client.update(key, target, changes))
                # dropped only once the write went through
                del bucket[target]
        finally:
            if not bucket:
                self._pending.pop(key, None)
        logger.info("provider_deploy key=%s record_id=%s writes=%s", key, record_id, len(results))
        self._after_deploy({"key": key, "id": record_id, "result": results})

    async def reset(self, key: str, record_id: str | None = None) -> None:
        bucket = self._pending.get(key)
        if bucket is None:
            return
        if record_id is None:
            del self._pending[key]
        else:
            bucket.pop(record_id, None)
            if not bucket:
                del self._pending[key]
        logger.info("provider_reset key=%s record_id=%s", key, record_id)
