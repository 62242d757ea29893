"""Type tag to implementation registries resolved once at bootstrap."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping

from .errors import UnknownComponent


@dataclass(frozen=True)
class LayoutSpec:
    name: str


DEFAULT_LAYOUTS: Dict[str, Any] = {
    name: LayoutSpec(name) for name in ("default", "block", "tabs", "collapse", "inline", "popup")
}


class Registry(Mapping[str, Any]):
    def __init__(self, kind: str, entries: Mapping[str, Any] | None = None) -> None:
        self.kind = kind
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, tag: str) -> Any:
        return self._entries[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, tag: str) -> Any:
        try:
            return self._entries[tag]
        except KeyError:
            raise UnknownComponent(message="no implementation registered", kind=self.kind, tag=tag) from None


def merge_registry(kind: str, defaults: Mapping[str, Any] | None, overrides: Mapping[str, Any] | None) -> Registry:
    entries = dict(defaults or {})
    entries.update(overrides or {})
    return Registry(kind, entries)
