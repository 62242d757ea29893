"""Schema normalization for client bootstrap."""

from __future__ import annotations

from typing import Any, Dict


ID_FIELD = "id"


def _normalize_entity(entity: Any) -> Any:
    if not isinstance(entity, dict):
        return entity
    item = dict(entity)
    if item.get("type") == "array":
        items = item.get("items")
        if items is None:
            items = {}
        if isinstance(items, dict):
            items = dict(items)
            items[ID_FIELD] = {"type": "id"}
            item["items"] = items
    return item


def normalize_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Return a client-ready copy of the entity schema.

    Array entities get an ``id`` field of type ``id`` on their item
    definition so every record is addressable. The caller's schema is left
    untouched; malformed definitions pass through for the client to reject.
    """
    return {key: _normalize_entity(entity) for key, entity in schema.items()}
