from __future__ import annotations

# petcare/db.py
import datetime as dt
import logging
import os
import queue
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import yaml

from .errors import DataAccessError

logger = logging.getLogger(__name__)

# DB 路径解析顺序：
# 1) 环境变量 PETCARE_DB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path（生产默认）
# 4) 兜底：项目根 petcare.db
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "petcare.db")
_DEFAULT_CONFIG = os.path.join(_PROJECT_ROOT, "config.yaml")
_SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schema.sql")

DEFAULT_POOL_SIZE = 5
DEFAULT_ACQUIRE_TIMEOUT = 10.0


# sqlite3 的默认 date/datetime 适配器已弃用，这里显式注册
def _adapt_date(v: dt.date) -> str:
    return v.isoformat()


def _adapt_datetime(v: dt.datetime) -> str:
    return v.isoformat(sep=" ")


def _adapt_time(v: dt.time) -> str:
    return v.isoformat()


def _convert_date(b: bytes) -> dt.date:
    return dt.date.fromisoformat(b.decode()[:10])


def _convert_datetime(b: bytes) -> dt.datetime:
    return dt.datetime.fromisoformat(b.decode())


def _convert_time(b: bytes) -> dt.time:
    return dt.time.fromisoformat(b.decode())


sqlite3.register_adapter(dt.date, _adapt_date)
sqlite3.register_adapter(dt.datetime, _adapt_datetime)
sqlite3.register_adapter(dt.time, _adapt_time)
sqlite3.register_converter("DATE", _convert_date)
sqlite3.register_converter("TIMESTAMP", _convert_datetime)
sqlite3.register_converter("DATETIME", _convert_datetime)
sqlite3.register_converter("TIME", _convert_time)


@dataclass(frozen=True)
class DbSettings:
    db_path: str
    pool_size: int = DEFAULT_POOL_SIZE
    acquire_timeout: float = DEFAULT_ACQUIRE_TIMEOUT


def _read_config_yaml(config_path: str | None = None) -> dict:
    cfg_path = config_path or _DEFAULT_CONFIG
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"config.yaml unreadable, using defaults: {e}")
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    for k in ("pool_size", "acquire_timeout"):
        if cfg.get(k) is not None:
            out[k] = cfg[k]
    return out


def load_settings(config_path: str | None = None) -> DbSettings:
    env_path = os.environ.get("PETCARE_DB_PATH")
    cfg = _read_config_yaml(config_path)
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = _ROOT_DB

    pool_size = int(os.environ.get("PETCARE_POOL_SIZE") or cfg.get("pool_size") or DEFAULT_POOL_SIZE)
    timeout = float(os.environ.get("PETCARE_ACQUIRE_TIMEOUT") or cfg.get("acquire_timeout") or DEFAULT_ACQUIRE_TIMEOUT)
    return DbSettings(db_path=path, pool_size=max(1, pool_size), acquire_timeout=timeout)


def _open_connection(path: str) -> sqlite3.Connection:
    if path != ":memory:":
        dirn = os.path.dirname(path) or "."
        os.makedirs(dirn, exist_ok=True)
    conn = sqlite3.connect(
        path,
        detect_types=sqlite3.PARSE_DECLTYPES,
        check_same_thread=False,
        isolation_level=None,
    )
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.row_factory = sqlite3.Row
    return conn


class ConnectionPool:
    """Bounded pool of sqlite3 connections, opened lazily.

    Connections are handed out through a queue; a slot that has never been
    used is represented by ``None`` and turned into a real connection on
    first acquisition.
    """

    def __init__(self, path: str, size: int = DEFAULT_POOL_SIZE, timeout: float = DEFAULT_ACQUIRE_TIMEOUT):
        self.path = path
        self.size = size
        self.timeout = timeout
        self._slots: queue.Queue[sqlite3.Connection | None] = queue.Queue(maxsize=size)
        for _ in range(size):
            self._slots.put(None)

    def acquire(self) -> sqlite3.Connection:
        try:
            conn = self._slots.get(timeout=self.timeout)
        except queue.Empty:
            raise DataAccessError(f"connection pool exhausted after {self.timeout}s")
        if conn is None:
            try:
                conn = _open_connection(self.path)
            except (sqlite3.Error, OSError) as e:
                self._slots.put(None)
                raise DataAccessError(f"cannot open database {self.path}: {e}") from e
        return conn

    def release(self, conn: sqlite3.Connection) -> None:
        try:
            if conn.in_transaction:
                conn.rollback()
        except sqlite3.Error:
            # 坏连接直接丢弃，槽位下次重新打开
            conn.close()
            self._slots.put(None)
            return
        self._slots.put(conn)

    def close(self) -> None:
        drained = []
        while True:
            try:
                drained.append(self._slots.get_nowait())
            except queue.Empty:
                break
        for conn in drained:
            if conn is not None:
                conn.close()
            self._slots.put(None)


class Database:
    """Injected handle on the pet-care store; every facade call goes through it."""

    def __init__(self, settings: DbSettings):
        self.settings = settings
        self.pool = ConnectionPool(settings.db_path, settings.pool_size, settings.acquire_timeout)

    @classmethod
    def from_path(cls, path: str, pool_size: int = DEFAULT_POOL_SIZE) -> "Database":
        return cls(DbSettings(db_path=path, pool_size=pool_size))

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        conn = self.pool.acquire()
        try:
            yield conn
        finally:
            self.pool.release(conn)

    @contextmanager
    def transaction(self, immediate: bool = False) -> Iterator[sqlite3.Connection]:
        """BEGIN ... COMMIT on one pooled connection; any exception rolls back.

        ``immediate=True`` takes the write lock at BEGIN, for read-then-write
        sequences that must not interleave with another writer.
        """
        with self.connect() as conn:
            conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            conn.commit()

    def ensure_schema(self) -> None:
        with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
            ddl = f.read()
        with self.connect() as conn:
            conn.executescript(ddl)

    def ping(self) -> bool:
        try:
            with self.connect() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except (sqlite3.Error, DataAccessError) as e:
            logger.error(f"database unreachable at {self.settings.db_path}: {e}")
            return False

    def close(self) -> None:
        self.pool.close()
