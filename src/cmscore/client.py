"""Unified data-access client and its assembly from resolved connectors."""

from __future__ import annotations

import copy
import logging
import uuid
from typing import Any, Callable, Dict, List

from .connectors import Connector, MemoryConnector, ResolvedConnectors
from .empty_data import create_empty_data
from .errors import ClientConfigError, EntityNotFound, RecordNotFound, SchemaError


Resolver = Callable[[Any, "DataClient"], Any]
ResolverMap = Dict[str, Dict[str, Resolver]]

logger = logging.getLogger("cms.bootstrap")


def _validate_schema(schema: Any) -> None:
    if not isinstance(schema, dict):
        raise SchemaError(message="schema must be an object", code="SCHEMA_INVALID")
    for key, entity in schema.items():
        if not isinstance(entity, dict):
            raise SchemaError(message="entity definition must be an object", code="ENTITY_INVALID", path=key)
        if not isinstance(entity.get("type"), str):
            raise SchemaError(message="entity type must be a string", code="ENTITY_TYPE_INVALID", path=f"{key}.type")
        if entity["type"] == "array" and not isinstance(entity.get("items"), dict):
            raise SchemaError(message="array entity requires items", code="ARRAY_ITEMS_INVALID", path=f"{key}.items")


class DataClient:
    def __init__(
        self,
        schema: Dict[str, Any],
        resolvers: ResolverMap | None = None,
        connector: Connector | None = None,
        connectors: Dict[str, Connector] | None = None,
    ) -> None:
        _validate_schema(schema)
        if connector is None and not connectors:
            raise ClientConfigError("client requires a connector or named connectors")
        self._schema = copy.deepcopy(schema)
        self._resolvers: ResolverMap = dict(resolvers or {})
        self._connector = connector
        self._connectors: Dict[str, Connector] = dict(connectors or {})

    @property
    def schema(self) -> Dict[str, Any]:
        return copy.deepcopy(self._schema)

    @property
    def default_connector(self) -> Connector | None:
        return self._connector

    @property
    def named_connectors(self) -> Dict[str, Connector]:
        return dict(self._connectors)

    def entity_keys(self) -> list[str]:
        return list(self._schema.keys())

    def _entity(self, key: str) -> dict:
        entity = self._schema.get(key)
        if entity is None:
            raise EntityNotFound(message="entity not in schema", key=key)
        return entity

    def _is_array(self, key: str) -> bool:
        return self._entity(key).get("type") == "array"

    def connector_for(self, key: str) -> Connector:
        connector = self._connectors.get(key) or self._connector
        if connector is None:
            raise ClientConfigError(f"no connector serves entity {key!r}")
        return connector

    def _load(self, key: str) -> Any:
        value = self.connector_for(key).load(key)
        if value is None:
            return [] if self._is_array(key) else {}
        return value

    def _resolve(self, key: str, record: Any) -> Any:
        fields = self._resolvers.get(key)
        if not fields or not isinstance(record, dict):
            return record
        resolved = dict(record)
        for field_name, fn in fields.items():
            resolved[field_name] = fn(record, self)
        return resolved

    def query(self, key: str) -> Any:
        value = self._load(key)
        if self._is_array(key):
            return [self._resolve(key, rec) for rec in value]
        return self._resolve(key, value)

    def get(self, key: str, record_id: str) -> dict:
        for record in self._records(key):
            if record.get("id") == record_id:
                return self._resolve(key, record)
        raise RecordNotFound(message="record not found", key=key, record_id=record_id)

    def _records(self, key: str) -> List[dict]:
        if not self._is_array(key):
            raise SchemaError(message="entity is not a list", code="ENTITY_NOT_ARRAY", path=key)
        return list(self._load(key))

    def create(self, key: str, values: dict) -> dict:
        records = self._records(key)
        record = copy.deepcopy(values)
        record["id"] = str(uuid.uuid4())
        records.append(record)
        self.connector_for(key).save(key, records)
        return copy.deepcopy(record)

    def update(self, key: str, record_id: str, changes: dict) -> dict:
        records = self._records(key)
        for record in records:
            if record.get("id") == record_id:
                record.update(copy.deepcopy(changes))
                record["id"] = record_id
                self.connector_for(key).save(key, records)
                return copy.deepcopy(record)
        raise RecordNotFound(message="record not found", key=key, record_id=record_id)

    def delete(self, key: str, record_id: str) -> None:
        records = self._records(key)
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            raise RecordNotFound(message="record not found", key=key, record_id=record_id)
        self.connector_for(key).save(key, remaining)

    def set(self, key: str, value: dict) -> dict:
        if self._is_array(key):
            raise SchemaError(message="use record operations on list entities", code="ENTITY_IS_ARRAY", path=key)
        current = self._load(key)
        merged = dict(current) if isinstance(current, dict) else {}
        merged.update(copy.deepcopy(value))
        self.connector_for(key).save(key, merged)
        return copy.deepcopy(merged)


def create_client(**options: Any) -> DataClient:
    return DataClient(
        schema=options["schema"],
        resolvers=options.get("resolvers"),
        connector=options.get("connector"),
        connectors=options.get("connectors"),
    )


def assemble_client(
    schema: Dict[str, Any],
    resolved: ResolvedConnectors,
    resolvers: ResolverMap | None = None,
    raw_schema: Dict[str, Any] | None = None,
) -> DataClient:
    """Build the single DataClient for a bootstrap.

    When no connector was supplied at all, a MemoryConnector seeded with
    empty data for every entity of ``raw_schema`` (or ``schema``) becomes the
    default. Schema errors from the client constructor propagate.
    """
    default_connector = resolved.default_connector
    if resolved.empty:
        default_connector = MemoryConnector(default_data=create_empty_data(raw_schema if raw_schema is not None else schema))
        logger.info("connector_fallback=memory entities=%s", sorted(schema.keys()))

    options: Dict[str, Any] = {"schema": schema, "resolvers": resolvers}
    if default_connector is not None:
        options["connector"] = default_connector
    if resolved.named_connectors:
        options["connectors"] = dict(resolved.named_connectors)
    return create_client(**options)
