from __future__ import annotations

import base64
import binascii
import dataclasses
import datetime as dt
import logging
import sqlite3
from enum import Enum

from fastapi import HTTPException, Request

from ..db import Database
from ..errors import PetCareError, ValidationError, ConstraintError, NotFoundError
from ..logs import LogContext
from ..models import ScheduleTarget

logger = logging.getLogger(__name__)


def get_db(request: Request) -> Database:
    return request.app.state.db


def decode_blob(b64: str | None) -> bytes | None:
    if b64 is None:
        return None
    try:
        return base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("blob fields must be base64 encoded")


def _plain(v):
    if isinstance(v, Enum):
        return v.value
    if isinstance(v, (dt.date, dt.time)):
        return v.isoformat()
    if isinstance(v, ScheduleTarget):
        return {"kind": v.kind.value, "target_id": v.target_id}
    return v


def to_json(rec) -> dict:
    """Dataclass record -> JSON-safe dict; blobs become has_<field> flags."""
    out = {}
    for f in dataclasses.fields(rec):
        v = getattr(rec, f.name)
        if isinstance(v, (bytes, bytearray)) or f.type in ("Optional[bytes]", "bytes"):
            out[f"has_{f.name}"] = v is not None
            continue
        out[f.name] = _plain(v)
    return out


def _safe_write(log: LogContext, result: str, err: str | None = None):
    try:
        log.write(result, err)
    except (PetCareError, sqlite3.Error) as e:
        logger.warning(f"operation log write failed for {log.action}: {e}")


def ok(log: LogContext, **payload) -> dict:
    _safe_write(log, "OK")
    return {"message": "ok", **payload}


def not_found(log: LogContext, what: str) -> HTTPException:
    _safe_write(log, "ERROR", f"{what}_not_found")
    return HTTPException(status_code=404, detail=f"{what}_not_found")


def http_error(log: LogContext | None, e: PetCareError) -> HTTPException:
    if log is not None:
        _safe_write(log, "ERROR", str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, ConstraintError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=500, detail="internal error")
