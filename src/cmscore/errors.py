"""Error taxonomy for client bootstrap and data access."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CmsError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return self.message


@dataclass
class SchemaError(CmsError):
    code: str
    path: str | None = None

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        base = f"{self.code}: {self.message}"
        return f"{base} (path={self.path})" if self.path else base


class ClientConfigError(CmsError):
    pass


@dataclass
class EntityNotFound(CmsError):
    key: str

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return f"{self.message} (entity={self.key!r})"


@dataclass
class RecordNotFound(CmsError):
    key: str
    record_id: str

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return f"{self.message} (entity={self.key!r}, record_id={self.record_id!r})"


@dataclass
class UnknownComponent(CmsError):
    kind: str
    tag: str

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return f"{self.message} (kind={self.kind!r}, tag={self.tag!r})"
