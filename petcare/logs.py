"""Operation log: one row per mutating HTTP call, searchable from /api/logs/search."""
from __future__ import annotations

import datetime as dt
import json
import time
import uuid
from typing import Any, Optional

from .db import Database

MAX_PAGE_SIZE = 200

_INSERT_SQL = """INSERT INTO operation_log
(ts,user,action,entity_type,entity_id,request_id,before_json,after_json,payload_json,result,err_msg,latency_ms)
VALUES(:ts,:user,:action,:entity_type,:entity_id,:request_id,:before_json,:after_json,:payload_json,:result,:err_msg,:latency_ms)"""


def _json_default(v):
    # blob 只记录长度
    if isinstance(v, (bytes, bytearray)):
        return f"<{len(v)} bytes>"
    if isinstance(v, (dt.date, dt.time)):
        return v.isoformat()
    return str(getattr(v, "value", v))


def _dump(obj: Any) -> Optional[str]:
    if obj is None:
        return None
    return json.dumps(obj, ensure_ascii=False, default=_json_default)


class LogContext:
    """Collects what a request touched, then writes it once via ``write``."""

    def __init__(self, db: Database, action: str, user: str = "system"):
        self.db = db
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.started = time.perf_counter()
        self.entity_type: Optional[str] = None
        self.entity_id: Optional[str] = None
        self.before = None
        self.after = None
        self.payload = None

    def set_entity(self, etype: str, eid):
        self.entity_type, self.entity_id = etype, str(eid)

    def set_before(self, obj): self.before = obj
    def set_after(self, obj): self.after = obj
    def set_payload(self, obj): self.payload = obj

    def to_record(self, result: str, err: Optional[str]) -> dict:
        return {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "user": self.user,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "before_json": _dump(self.before),
            "after_json": _dump(self.after),
            "payload_json": _dump(self.payload),
            "result": result,
            "err_msg": err,
            "latency_ms": int((time.perf_counter() - self.started) * 1000),
        }

    def write(self, result: str = "OK", err: Optional[str] = None):
        with self.db.connect() as conn:
            conn.execute(_INSERT_SQL, self.to_record(result, err))


def search_logs(
    db: Database,
    q: str | None,
    action: str | None,
    ts_from: str | None,
    ts_to: str | None,
    page: int,
    size: int,
    entity_type: str | None = None,
    entity_id: str | None = None,
) -> tuple[int, list[dict]]:
    """Newest first. ``q`` matches inside payload/before/after JSON."""
    clauses, params = [], {}
    if q:
        clauses.append("(payload_json LIKE :q OR before_json LIKE :q OR after_json LIKE :q)")
        params["q"] = f"%{q}%"
    for col, op, val in (
        ("action", "=", action),
        ("entity_type", "=", entity_type),
        ("entity_id", "=", entity_id),
        ("ts", ">=", ts_from),
        ("ts", "<=", ts_to),
    ):
        if val:
            key = f"p{len(params)}"
            clauses.append(f"{col} {op} :{key}")
            params[key] = val
    where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

    size = max(1, min(int(size), MAX_PAGE_SIZE))
    page = max(1, int(page))
    with db.connect() as conn:
        total = conn.execute(f"SELECT COUNT(1) AS cnt FROM operation_log{where}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM operation_log{where} ORDER BY ts DESC, id DESC LIMIT :limit OFFSET :offset",
            {**params, "limit": size, "offset": (page - 1) * size},
        ).fetchall()
    return total, [dict(r) for r in rows]
