from __future__ import annotations

import datetime as dt
from sqlite3 import Connection


def insert_schedule(
    conn: Connection,
    startdate: dt.date | None,
    repeat_option: str,
    hour: int,
    minute: int,
    dietid: int | None,
    activityid: int | None,
) -> int:
    cur = conn.execute(
        "INSERT INTO petschedule(startdate, repeat_option, hour, minute, dietid, activityid) VALUES(?,?,?,?,?,?)",
        (startdate, repeat_option, hour, minute, dietid, activityid),
    )
    return int(cur.lastrowid)


def update_schedule(
    conn: Connection,
    petscheduleid: int,
    startdate: dt.date | None,
    repeat_option: str,
    hour: int,
    minute: int,
    dietid: int | None,
    activityid: int | None,
) -> int:
    cur = conn.execute(
        "UPDATE petschedule SET startdate=?, repeat_option=?, hour=?, minute=?, dietid=?, activityid=? "
        "WHERE petscheduleid=?",
        (startdate, repeat_option, hour, minute, dietid, activityid, petscheduleid),
    )
    return cur.rowcount


def delete_schedule(conn: Connection, petscheduleid: int) -> int:
    return conn.execute("DELETE FROM petschedule WHERE petscheduleid=?", (petscheduleid,)).rowcount


def get_schedule(conn: Connection, petscheduleid: int):
    return conn.execute("SELECT * FROM petschedule WHERE petscheduleid=?", (petscheduleid,)).fetchone()


def list_by_diet(conn: Connection, dietid: int):
    return conn.execute("SELECT * FROM petschedule WHERE dietid=?", (dietid,)).fetchall()


def list_by_activity(conn: Connection, activityid: int):
    return conn.execute("SELECT * FROM petschedule WHERE activityid=?", (activityid,)).fetchall()
