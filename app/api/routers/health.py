# app/api/routers/health.py
from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import DBSession
from app.services.config_service import get_bucket_base_url, extract_bucket_name

router = APIRouter()


def _safe_err(e: Exception) -> str:
    s = str(e) or e.__class__.__name__
    # evita filtrar url/credenciales (best effort)
    for k in ("postgres://", "postgresql://", "postgresql+psycopg2://"):
        if k in s:
            s = "db_error"
    return s[:300]


@router.head("", include_in_schema=False)
def health_head() -> Response:
    return Response(status_code=200)


@router.get("")
def health() -> dict[str, Any]:
    return {"status": "ok"}


@router.get("/ready")
def ready(db: Session = DBSession):
    started = time.time()

    db_ok = False
    db_error: str | None = None
    bucket_url = ""
    try:
        db.execute(text("SELECT 1"))
        bucket_url = get_bucket_base_url(db)
        db_ok = True
    except SQLAlchemyError as e:
        db_error = _safe_err(e)

    payload = {
        "ok": db_ok,
        "db": {"ok": db_ok, "error": db_error},
        "bucket": {
            "configured": bool(bucket_url),
            "name": extract_bucket_name(bucket_url),
        },
        "elapsed_ms": int((time.time() - started) * 1000),
    }

    if not db_ok:
        return JSONResponse(payload, status_code=503)
    return payload
