from __future__ import annotations

from sqlite3 import Connection


def insert_notification(conn: Connection, userid: int, text: str | None) -> int:
    cur = conn.execute("INSERT INTO notification(userid, text) VALUES(?,?)", (userid, text))
    return int(cur.lastrowid)


def list_by_user(conn: Connection, userid: int):
    return conn.execute("SELECT * FROM notification WHERE userid=?", (userid,)).fetchall()


def update_text(conn: Connection, notiid: int, text: str | None) -> int:
    return conn.execute("UPDATE notification SET text=? WHERE notiid=?", (text, notiid)).rowcount


def delete_notification(conn: Connection, notiid: int) -> int:
    return conn.execute("DELETE FROM notification WHERE notiid=?", (notiid,)).rowcount


def delete_by_user(conn: Connection, userid: int) -> int:
    return conn.execute("DELETE FROM notification WHERE userid=?", (userid,)).rowcount
