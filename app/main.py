"""FastAPI host for one bootstrapped CMS instance."""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict

from fastapi import Body, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cmscore.config import Settings, load_env_file

load_env_file(ROOT / "app" / ".env")

from cmscore import CMS, Location
from cmscore.empty_data import create_empty_data
from cmscore.errors import CmsError, EntityNotFound, RecordNotFound


settings = Settings.from_env()
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger("cms.http")


def _load_schema(path: str | None) -> Dict[str, Any]:
    if not path:
        return {}
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise CmsError(f"schema file must contain an object: {path}")
    return data


def build_cms(settings: Settings) -> CMS:
    schema = _load_schema(settings.schema_path)
    connector = None
    if settings.use_db:
        from app.connectors_db import DbConnector

        connector = DbConnector(default_data=create_empty_data(schema))
        connector.ensure_table()
    return CMS(schema, connector=connector, settings=settings)


cms = build_cms(settings)
cms.mount()
app = FastAPI(title="CMS")
logger.info("cms_host use_db=%s schema_path=%s base_url=%s", settings.use_db, settings.schema_path, cms.base_url)


def _error_response(code: str, message: str, path: str | None = None, detail: dict | None = None, status: int = 400) -> JSONResponse:
    body = {
        "ok": False,
        "errors": [{"code": code, "message": message, "path": path, "detail": detail}],
        "warnings": [],
    }
    return JSONResponse(jsonable_encoder(body), status_code=status)


def _ok_response(payload: dict, warnings: list | None = None, status: int = 200) -> JSONResponse:
    body = {"ok": True, **payload, "errors": [], "warnings": warnings or []}
    return JSONResponse(jsonable_encoder(body), status_code=status)


@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    total_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %s total_ms=%.1f", request.method, request.url.path, response.status_code, total_ms)
    return response


@app.exception_handler(EntityNotFound)
async def entity_not_found_handler(request: Request, exc: EntityNotFound):
    return _error_response("ENTITY_NOT_FOUND", exc.message, path=exc.key, status=404)


@app.exception_handler(RecordNotFound)
async def record_not_found_handler(request: Request, exc: RecordNotFound):
    return _error_response("RECORD_NOT_FOUND", exc.message, path=f"{exc.key}/{exc.record_id}", status=404)


@app.exception_handler(CmsError)
async def cms_error_handler(request: Request, exc: CmsError):
    return _error_response(getattr(exc, "code", "CMS_ERROR"), exc.message, path=getattr(exc, "path", None))


def _require_entity(key: str) -> None:
    if key not in cms.schema:
        raise EntityNotFound(message="entity not in schema", key=key)


@app.get("/health")
async def health() -> dict:
    return {"ok": True}


@app.get("/bootstrap")
async def bootstrap(pathname: str = "/", search: str = "") -> JSONResponse:
    state = cms.render(Location(pathname=pathname, search=search))
    return _ok_response(
        {
            "routes": state.routes,
            "params": state.params,
            "root_key": state.root_key,
            "base_url": state.base_url,
            "entities": cms.client.entity_keys(),
            "image_service_configs": state.image_service_configs,
            "intl": {
                "locale": state.intl.locale,
                "default_locale": state.intl.default_locale,
                "messages": state.intl.messages,
            },
            "layouts": sorted(state.layouts.keys()),
        }
    )


@app.get("/entities/{key}")
async def read_entity(key: str) -> JSONResponse:
    return _ok_response({"key": key, "value": cms.client.query(key)})


@app.get("/entities/{key}/{record_id}")
async def read_record(key: str, record_id: str) -> JSONResponse:
    return _ok_response({"key": key, "record": cms.client.get(key, record_id)})


@app.post("/entities/{key}")
async def create_record(key: str, payload: dict = Body(...)) -> JSONResponse:
    record = cms.client.create(key, payload.get("record") or {})
    return _ok_response({"key": key, "record": record, "record_id": record["id"]}, status=201)


@app.delete("/entities/{key}/{record_id}")
async def delete_record(key: str, record_id: str) -> JSONResponse:
    cms.client.delete(key, record_id)
    return _ok_response({"key": key, "record_id": record_id})


@app.post("/entities/{key}/changes")
async def stage_changes(key: str, payload: dict = Body(...)) -> JSONResponse:
    _require_entity(key)
    changes = payload.get("changes")
    if not isinstance(changes, dict):
        return _error_response("CHANGES_INVALID", "changes must be an object", path="changes")
    provider = cms.provider
    if provider is None:
        return _error_response("PROVIDER_UNMOUNTED", "no provider mounted", status=409)
    provider.stage(key, changes, record_id=payload.get("record_id"))
    return _ok_response({"key": key, "pending": provider.pending(key)})


@app.post("/deploy/{key}")
async def deploy(key: str, record_id: str | None = None) -> JSONResponse:
    _require_entity(key)
    await cms.deploy(key, record_id)
    return _ok_response({"key": key, "record_id": record_id, "provider_state": cms.provider_state.value})


@app.post("/reset/{key}")
async def reset(key: str, record_id: str | None = None) -> JSONResponse:
    _require_entity(key)
    await cms.reset(key, record_id)
    return _ok_response({"key": key, "record_id": record_id, "provider_state": cms.provider_state.value})
