from __future__ import annotations

import datetime as dt
from sqlite3 import Connection


def insert_ticket(conn: Connection, userid: int, subject: str | None, description: str | None, attachment: bytes | None) -> int:
    cur = conn.execute(
        "INSERT INTO ticket(subject, description, attachment, status, userid) VALUES(?,?,?,'pending',?)",
        (subject, description, attachment, userid),
    )
    return int(cur.lastrowid)


def get_status(conn: Connection, ticketid: int) -> str | None:
    row = conn.execute("SELECT status FROM ticket WHERE ticketid=?", (ticketid,)).fetchone()
    return row["status"] if row else None


def assign(conn: Connection, ticketid: int, managerid: int, assigned_at: dt.datetime) -> int:
    cur = conn.execute(
        "UPDATE ticket SET managerid=?, assigntime=?, status='solving' WHERE ticketid=?",
        (managerid, assigned_at, ticketid),
    )
    return cur.rowcount


def update_response(conn: Connection, ticketid: int, response: str | None, status: str, expected_status: str) -> int:
    # expected_status 防止读-改之间状态被并发改写
    cur = conn.execute(
        "UPDATE ticket SET respone=?, status=? WHERE ticketid=? AND status=?",
        (response, status, ticketid, expected_status),
    )
    return cur.rowcount


def update_unassigned(conn: Connection, ticketid: int, subject: str | None, description: str | None, attachment: bytes | None) -> int:
    cur = conn.execute(
        "UPDATE ticket SET subject=?, description=?, attachment=? WHERE ticketid=? AND managerid IS NULL",
        (subject, description, attachment, ticketid),
    )
    return cur.rowcount


def get_by_id(conn: Connection, ticketid: int):
    return conn.execute("SELECT * FROM ticket WHERE ticketid=?", (ticketid,)).fetchone()


def list_all(conn: Connection):
    return conn.execute("SELECT * FROM ticket").fetchall()


def list_by_user(conn: Connection, userid: int):
    return conn.execute("SELECT * FROM ticket WHERE userid=?", (userid,)).fetchall()


def list_by_manager(conn: Connection, managerid: int):
    return conn.execute("SELECT * FROM ticket WHERE managerid=?", (managerid,)).fetchall()


def delete_ticket(conn: Connection, ticketid: int) -> int:
    return conn.execute("DELETE FROM ticket WHERE ticketid=?", (ticketid,)).rowcount
