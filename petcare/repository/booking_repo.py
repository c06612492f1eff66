from __future__ import annotations

import datetime as dt
from sqlite3 import Connection


def insert_booking(
    conn: Connection,
    poid: int,
    svid: int,
    slot: dt.time,
    serve_date: dt.date | None,
    payment_method: str | None,
    status: str | None,
) -> int:
    cur = conn.execute(
        "INSERT INTO booking(poid, svid, slot, servedate, payment_method, status) VALUES(?,?,?,?,?,?)",
        (poid, svid, slot, serve_date, payment_method, status),
    )
    return int(cur.lastrowid)


def find_active_booking(conn: Connection, svid: int, slot: dt.time, serve_date: dt.date | None) -> int | None:
    # 同一服务、时段、日期只允许一个未取消的预约
    row = conn.execute(
        "SELECT bookid FROM booking WHERE svid=? AND slot=? AND servedate IS ? "
        "AND COALESCE(status, '') != 'cancelled' LIMIT 1",
        (svid, slot, serve_date),
    ).fetchone()
    return row["bookid"] if row else None


def pet_owned_by(conn: Connection, petid: int, poid: int) -> bool:
    row = conn.execute("SELECT 1 FROM pet WHERE petid=? AND userid=?", (petid, poid)).fetchone()
    return row is not None


def booking_exists(conn: Connection, bookid: int) -> bool:
    return conn.execute("SELECT 1 FROM booking WHERE bookid=?", (bookid,)).fetchone() is not None


def get_booking(conn: Connection, bookid: int):
    return conn.execute("SELECT * FROM booking WHERE bookid=?", (bookid,)).fetchone()


def list_by_owner(conn: Connection, poid: int):
    return conn.execute("SELECT * FROM booking WHERE poid=?", (poid,)).fetchall()


def list_by_service(conn: Connection, svid: int):
    return conn.execute("SELECT * FROM booking WHERE svid=?", (svid,)).fetchall()


def update_status(conn: Connection, bookid: int, status: str) -> int:
    return conn.execute("UPDATE booking SET status=? WHERE bookid=?", (status, bookid)).rowcount


def delete_booking(conn: Connection, bookid: int) -> int:
    return conn.execute("DELETE FROM booking WHERE bookid=?", (bookid,)).rowcount


# ---- booking <-> pet ----

def insert_booking_pet(conn: Connection, bookid: int, petid: int) -> int:
    return conn.execute("INSERT INTO booking_pet(bookid, petid) VALUES(?,?)", (bookid, petid)).rowcount


def delete_booking_pet(conn: Connection, bookid: int, petid: int) -> int:
    return conn.execute("DELETE FROM booking_pet WHERE bookid=? AND petid=?", (bookid, petid)).rowcount


def list_pet_ids(conn: Connection, bookid: int) -> list[int]:
    rows = conn.execute("SELECT petid FROM booking_pet WHERE bookid=? ORDER BY petid", (bookid,)).fetchall()
    return [r["petid"] for r in rows]


# ---- report / review / update ----

def insert_report(conn: Connection, bookid: int, text: str | None, image: bytes | None) -> int:
    return conn.execute(
        "INSERT INTO service_report(bookid, text, image) VALUES(?,?,?)", (bookid, text, image)
    ).rowcount


def update_report(conn: Connection, bookid: int, text: str | None, image: bytes | None) -> int:
    return conn.execute(
        "UPDATE service_report SET text=?, image=? WHERE bookid=?", (text, image, bookid)
    ).rowcount


def delete_report(conn: Connection, bookid: int) -> int:
    return conn.execute("DELETE FROM service_report WHERE bookid=?", (bookid,)).rowcount


def get_report(conn: Connection, bookid: int):
    return conn.execute("SELECT * FROM service_report WHERE bookid=?", (bookid,)).fetchone()


def insert_review(conn: Connection, bookid: int, start: int, comment: str | None) -> int:
    return conn.execute(
        "INSERT INTO service_review(bookid, start, comment) VALUES(?,?,?)", (bookid, start, comment)
    ).rowcount


def update_review(conn: Connection, bookid: int, start: int, comment: str | None) -> int:
    return conn.execute(
        "UPDATE service_review SET start=?, comment=? WHERE bookid=?", (start, comment, bookid)
    ).rowcount


def delete_review(conn: Connection, bookid: int) -> int:
    return conn.execute("DELETE FROM service_review WHERE bookid=?", (bookid,)).rowcount


def get_review(conn: Connection, bookid: int):
    return conn.execute("SELECT * FROM service_review WHERE bookid=?", (bookid,)).fetchone()


def next_update_no(conn: Connection, bookid: int) -> int:
    row = conn.execute(
        "SELECT COALESCE(MAX(no_update), 0) AS n FROM service_update WHERE bookid=?", (bookid,)
    ).fetchone()
    return int(row["n"]) + 1


def insert_update(conn: Connection, bookid: int, no_update: int, text: str | None, image: bytes | None) -> int:
    return conn.execute(
        "INSERT INTO service_update(bookid, no_update, text, image) VALUES(?,?,?,?)",
        (bookid, no_update, text, image),
    ).rowcount


def list_updates(conn: Connection, bookid: int):
    return conn.execute(
        "SELECT * FROM service_update WHERE bookid=? ORDER BY no_update", (bookid,)
    ).fetchall()
