from __future__ import annotations

import datetime as dt
from sqlite3 import Connection


def insert_schedule(conn: Connection, scheduled_time: dt.datetime | None, tittle: str | None, detail: str | None, userid: int) -> int:
    cur = conn.execute(
        "INSERT INTO schedule(scheduled_time, tittle, detail, userid) VALUES(?,?,?,?)",
        (scheduled_time, tittle, detail, userid),
    )
    return int(cur.lastrowid)


def update_schedule(
    conn: Connection,
    scheduleid: int,
    scheduled_time: dt.datetime | None,
    tittle: str | None,
    detail: str | None,
    userid: int,
) -> int:
    cur = conn.execute(
        "UPDATE schedule SET scheduled_time=?, tittle=?, detail=?, userid=? WHERE scheduleid=?",
        (scheduled_time, tittle, detail, userid, scheduleid),
    )
    return cur.rowcount


def delete_schedule(conn: Connection, scheduleid: int) -> int:
    return conn.execute("DELETE FROM schedule WHERE scheduleid=?", (scheduleid,)).rowcount


def get_schedule(conn: Connection, scheduleid: int):
    return conn.execute("SELECT * FROM schedule WHERE scheduleid=?", (scheduleid,)).fetchone()


def list_by_user(conn: Connection, userid: int):
    return conn.execute("SELECT * FROM schedule WHERE userid=?", (userid,)).fetchall()
