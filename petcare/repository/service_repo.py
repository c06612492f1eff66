from __future__ import annotations

import datetime as dt
from sqlite3 import Connection


# ---- service type ----

def insert_type(conn: Connection, type_name: str) -> int:
    cur = conn.execute("INSERT INTO servicetype(type) VALUES(?)", (type_name,))
    return int(cur.lastrowid)


def update_type(conn: Connection, typeid: int, type_name: str) -> int:
    return conn.execute("UPDATE servicetype SET type=? WHERE typeid=?", (type_name, typeid)).rowcount


def delete_type(conn: Connection, typeid: int) -> int:
    return conn.execute("DELETE FROM servicetype WHERE typeid=?", (typeid,)).rowcount


def list_types(conn: Connection):
    return conn.execute("SELECT * FROM servicetype").fetchall()


def get_type(conn: Connection, typeid: int):
    return conn.execute("SELECT * FROM servicetype WHERE typeid=?", (typeid,)).fetchone()


# ---- service ----

def insert_service(
    conn: Connection,
    name: str,
    price: int | None,
    description: str | None,
    duration: dt.time | None,
    license: bytes | None,
    typeid: int | None,
    providerid: int,
) -> int:
    cur = conn.execute(
        "INSERT INTO service(name, price, description, duration, license, typeid, providerid) VALUES(?,?,?,?,?,?,?)",
        (name, price, description, duration, license, typeid, providerid),
    )
    return int(cur.lastrowid)


def update_service(
    conn: Connection,
    serviceid: int,
    name: str,
    price: int | None,
    description: str | None,
    duration: dt.time | None,
    license: bytes | None,
    typeid: int | None,
    providerid: int,
) -> int:
    cur = conn.execute(
        "UPDATE service SET name=?, price=?, description=?, duration=?, license=?, typeid=?, providerid=? "
        "WHERE serviceid=?",
        (name, price, description, duration, license, typeid, providerid, serviceid),
    )
    return cur.rowcount


def delete_service(conn: Connection, serviceid: int) -> int:
    return conn.execute("DELETE FROM service WHERE serviceid=?", (serviceid,)).rowcount


def get_service(conn: Connection, serviceid: int):
    return conn.execute("SELECT * FROM service WHERE serviceid=?", (serviceid,)).fetchone()


def list_services(conn: Connection):
    return conn.execute("SELECT * FROM service").fetchall()


def list_by_provider(conn: Connection, providerid: int):
    return conn.execute("SELECT * FROM service WHERE providerid=?", (providerid,)).fetchall()


def list_by_type(conn: Connection, typeid: int):
    return conn.execute("SELECT * FROM service WHERE typeid=?", (typeid,)).fetchall()


# ---- time slot ----

def insert_slot(conn: Connection, serviceid: int, slot: dt.time) -> int:
    return conn.execute("INSERT INTO timeslot(serviceid, slot) VALUES(?,?)", (serviceid, slot)).rowcount


def delete_slot(conn: Connection, serviceid: int, slot: dt.time) -> int:
    return conn.execute("DELETE FROM timeslot WHERE serviceid=? AND slot=?", (serviceid, slot)).rowcount


def list_slots_by_service(conn: Connection, serviceid: int):
    return conn.execute("SELECT * FROM timeslot WHERE serviceid=?", (serviceid,)).fetchall()


def list_slots(conn: Connection):
    return conn.execute("SELECT * FROM timeslot").fetchall()
