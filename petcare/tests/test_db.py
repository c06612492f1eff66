"""
连接池 / 配置 / 事务测试
"""

import datetime as dt
import sqlite3

import pytest

from petcare.db import Database, DbSettings, load_settings, ConnectionPool
from petcare.errors import DataAccessError


def _write_cfg(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestSettings:

    def test_env_path_wins(self, tmp_path, monkeypatch):
        cfg = _write_cfg(tmp_path / "config.yaml", "db_path: /nowhere/prod.db\ntest_db_path: /nowhere/test.db\n")
        monkeypatch.setenv("PETCARE_DB_PATH", str(tmp_path / "env.db"))
        s = load_settings(cfg)
        assert s.db_path == str(tmp_path / "env.db")

    def test_test_db_path_used_under_pytest(self, tmp_path, monkeypatch):
        cfg = _write_cfg(tmp_path / "config.yaml", "db_path: prod.db\ntest_db_path: test.db\n")
        monkeypatch.delenv("PETCARE_DB_PATH", raising=False)
        assert load_settings(cfg).db_path == "test.db"

    def test_db_path_when_no_test_path(self, tmp_path, monkeypatch):
        cfg = _write_cfg(tmp_path / "config.yaml", "db_path: '  prod.db  '\npool_size: 3\nacquire_timeout: 2.5\n")
        monkeypatch.delenv("PETCARE_DB_PATH", raising=False)
        monkeypatch.delenv("PETCARE_POOL_SIZE", raising=False)
        monkeypatch.delenv("PETCARE_ACQUIRE_TIMEOUT", raising=False)
        s = load_settings(cfg)
        assert s.db_path == "prod.db"
        assert s.pool_size == 3
        assert s.acquire_timeout == 2.5

    def test_missing_config_falls_back_to_root_db(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PETCARE_DB_PATH", raising=False)
        s = load_settings(str(tmp_path / "absent.yaml"))
        assert s.db_path.endswith("petcare.db")
        assert s.pool_size == 5

    def test_broken_yaml_is_ignored(self, tmp_path, monkeypatch):
        cfg = _write_cfg(tmp_path / "config.yaml", "db_path: [unclosed\n")
        monkeypatch.delenv("PETCARE_DB_PATH", raising=False)
        assert load_settings(cfg).db_path.endswith("petcare.db")

    def test_pool_size_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PETCARE_POOL_SIZE", "2")
        assert load_settings(str(tmp_path / "absent.yaml")).pool_size == 2


class TestPool:

    def test_exhausted_pool_raises(self, tmp_db_path):
        db = Database(DbSettings(db_path=tmp_db_path, pool_size=1, acquire_timeout=0.05))
        with db.connect():
            with pytest.raises(DataAccessError):
                with db.connect():
                    pass
        # 归还后可再次获取
        with db.connect() as conn:
            assert conn.execute("SELECT 1").fetchone()[0] == 1
        db.close()

    def test_unopenable_path_raises_data_access_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        pool = ConnectionPool(str(blocker / "sub" / "db.sqlite"), size=1, timeout=0.05)
        with pytest.raises(DataAccessError):
            pool.acquire()
        # 槽位已归还
        with pytest.raises(DataAccessError):
            pool.acquire()

    def test_release_rolls_back_open_transaction(self, tmp_db_path):
        db = Database(DbSettings(db_path=tmp_db_path, pool_size=1))
        db.ensure_schema()
        with db.connect() as conn:
            conn.execute("BEGIN")
            conn.execute("INSERT INTO servicetype(type) VALUES('Walking')")
        with db.connect() as conn:
            assert conn.execute("SELECT COUNT(*) FROM servicetype").fetchone()[0] == 0
        db.close()

    def test_ping(self, db):
        assert db.ping() is True

    def test_close_then_reuse(self, db):
        db.close()
        assert db.ping() is True


class TestTransaction:

    def test_commit(self, db):
        with db.transaction() as conn:
            conn.execute("INSERT INTO servicetype(type) VALUES('Boarding')")
        with db.connect() as conn:
            assert conn.execute("SELECT COUNT(*) FROM servicetype").fetchone()[0] == 1

    def test_exception_rolls_back(self, db):
        with pytest.raises(RuntimeError):
            with db.transaction() as conn:
                conn.execute("INSERT INTO servicetype(type) VALUES('Boarding')")
                raise RuntimeError("boom")
        with db.connect() as conn:
            assert conn.execute("SELECT COUNT(*) FROM servicetype").fetchone()[0] == 0

    def test_date_time_round_trip(self, db):
        with db.connect() as conn:
            conn.execute("CREATE TABLE t (d DATE, tm TIME, ts TIMESTAMP)")
            conn.execute("INSERT INTO t VALUES (?,?,?)", (dt.date(2024, 2, 29), dt.time(7, 15), dt.datetime(2024, 1, 2, 3, 4, 5)))
            row = conn.execute("SELECT * FROM t").fetchone()
        assert row["d"] == dt.date(2024, 2, 29)
        assert row["tm"] == dt.time(7, 15)
        assert row["ts"] == dt.datetime(2024, 1, 2, 3, 4, 5)

    def test_immediate_holds_write_lock(self, db, tmp_db_path):
        other = sqlite3.connect(tmp_db_path, timeout=0.05, isolation_level=None)
        try:
            with db.transaction(immediate=True) as conn:
                assert conn.in_transaction
                with pytest.raises(sqlite3.OperationalError):
                    other.execute("BEGIN IMMEDIATE")
            # 提交后锁释放
            other.execute("BEGIN IMMEDIATE")
            other.rollback()
        finally:
            other.close()
