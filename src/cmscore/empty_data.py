"""Seed data with empty values for every entity in a schema."""

from __future__ import annotations

from typing import Any, Callable, Dict


EmptyFactory = Callable[[dict], Any]


def _empty_object(definition: dict) -> dict:
    children = definition.get("items")
    if not isinstance(children, dict):
        return {}
    return {key: empty_value(child) for key, child in children.items()}


def _empty_relation(definition: dict) -> Any:
    relation = definition.get("relation")
    if isinstance(relation, dict) and relation.get("type") == "toMany":
        return []
    return None


EMPTY_VALUES: Dict[str, EmptyFactory] = {
    "array": lambda _: [],
    "object": _empty_object,
    "string": lambda _: "",
    "dateTime": lambda _: "",
    "id": lambda _: "",
    "number": lambda _: 0,
    "boolean": lambda _: False,
    "json": lambda _: {},
    "geoPoint": lambda _: {"type": "geoPoint", "coordinates": [], "placeId": "", "address": ""},
    "file": lambda _: {"name": "", "contentType": "", "size": 0, "url": ""},
    "image": lambda _: {"name": "", "contentType": "", "size": 0, "url": ""},
    "relation": _empty_relation,
}


def empty_value(definition: Any) -> Any:
    if not isinstance(definition, dict):
        return None
    factory = EMPTY_VALUES.get(definition.get("type"))
    if factory is None:
        return None
    return factory(definition)


def create_empty_data(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Map each entity key to the empty value of its declared shape."""
    return {key: empty_value(definition) for key, definition in schema.items()}
