"""Postgres-backed connector storing one jsonb document per entity."""

from __future__ import annotations

import copy
import json
from typing import Any, Dict

import psycopg2.extras

from app.db import execute, fetch_one, get_conn
from cmscore.connectors import Connector


CREATE_TABLE_SQL = """
create table if not exists cms_entities (
    entity_key text primary key,
    data jsonb not null,
    updated_at timestamptz not null default now()
)
"""


class DbConnector(Connector):
    def __init__(self, default_data: Dict[str, Any] | None = None) -> None:
        self._defaults = copy.deepcopy(default_data or {})

    def ensure_table(self) -> None:
        with get_conn() as conn:
            execute(conn, CREATE_TABLE_SQL, query_name="cms_entities.create_table")

    def load(self, key: str) -> Any:
        with get_conn() as conn:
            row = fetch_one(
                conn,
                "select data from cms_entities where entity_key=%s",
                [key],
                query_name="cms_entities.load",
            )
        if not row:
            return copy.deepcopy(self._defaults.get(key))
        data = row.get("data")
        if isinstance(data, str):
            data = json.loads(data)
        return data

    def save(self, key: str, value: Any) -> None:
        with get_conn() as conn:
            execute(
                conn,
                """
                insert into cms_entities (entity_key, data, updated_at)
                values (%s, %s, now())
                on conflict (entity_key) do update set data=excluded.data, updated_at=now()
                """,
                [key, psycopg2.extras.Json(value)],
                query_name="cms_entities.save",
            )
