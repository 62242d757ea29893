"""Connector contract, in-memory connector and connector resolution."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict


DEFAULT_KEY = "__default"

logger = logging.getLogger("cms.connectors")


class Connector:
    """Data source backing one or more entities.

    Subclasses store one value per entity key: a list of records for array
    entities, a mapping for object entities.
    """

    def load(self, key: str) -> Any:
        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemoryConnector(Connector):
    def __init__(self, default_data: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(default_data or {})

    def load(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._data.keys())


@dataclass
class ConnectorSpec:
    default: Connector | None = None
    by_entity: Dict[str, Connector] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedConnectors:
    default_connector: Connector | None = None
    named_connectors: Dict[str, Connector] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return self.default_connector is None and not self.named_connectors


def parse_connector_spec(value: Any) -> ConnectorSpec:
    """Turn any accepted connector argument into an explicit ConnectorSpec.

    Accepts ``None``, a single connector, a ``ConnectorSpec``, or a mapping of
    entity key to connector where ``"__default"`` names the default. The
    caller's mapping is copied, never mutated.
    """
    if isinstance(value, ConnectorSpec):
        return ConnectorSpec(default=value.default, by_entity=dict(value.by_entity))
    if value is None:
        return ConnectorSpec()
    if isinstance(value, dict):
        by_entity = dict(value)
        default = by_entity.pop(DEFAULT_KEY, None)
        return ConnectorSpec(default=default, by_entity=by_entity)
    return ConnectorSpec(default=value)


def resolve_connectors(connector: Any = None) -> ResolvedConnectors:
    spec = parse_connector_spec(connector)
    resolved = ResolvedConnectors(default_connector=spec.default, named_connectors=spec.by_entity)
    logger.info(
        "connectors_resolved default=%s named=%s",
        type(resolved.default_connector).__name__ if resolved.default_connector is not None else None,
        sorted(resolved.named_connectors.keys()),
    )
    return resolved
