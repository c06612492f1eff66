from __future__ import annotations

import datetime as dt
from sqlite3 import Connection


def insert_pet(
    conn: Connection,
    name: str,
    breed: str,
    description: str | None,
    picture: bytes | None,
    age: int | None,
    dob: dt.date | None,
    userid: int,
) -> int:
    cur = conn.execute(
        "INSERT INTO pet(name, breed, description, picture, age, dob, userid) VALUES(?,?,?,?,?,?,?)",
        (name, breed, description, picture, age, dob, userid),
    )
    return int(cur.lastrowid)


def update_pet(
    conn: Connection,
    petid: int,
    name: str,
    breed: str,
    description: str | None,
    picture: bytes | None,
    age: int | None,
    dob: dt.date | None,
    userid: int,
) -> int:
    cur = conn.execute(
        "UPDATE pet SET name=?, breed=?, description=?, picture=?, age=?, dob=?, userid=? WHERE petid=?",
        (name, breed, description, picture, age, dob, userid, petid),
    )
    return cur.rowcount


def delete_pet(conn: Connection, petid: int) -> int:
    return conn.execute("DELETE FROM pet WHERE petid=?", (petid,)).rowcount


def get_pet(conn: Connection, petid: int):
    return conn.execute("SELECT * FROM pet WHERE petid=?", (petid,)).fetchone()


def list_pets(conn: Connection):
    return conn.execute("SELECT * FROM pet").fetchall()


def list_pets_by_user(conn: Connection, userid: int):
    return conn.execute("SELECT * FROM pet WHERE userid=?", (userid,)).fetchall()


# ---- diet ----

def insert_diet(conn: Connection, name: str, amount: str | None, description: str | None, petid: int) -> int:
    cur = conn.execute(
        "INSERT INTO diet(name, amount, description, petid) VALUES(?,?,?,?)",
        (name, amount, description, petid),
    )
    return int(cur.lastrowid)


def update_diet(conn: Connection, dietid: int, name: str, amount: str | None, description: str | None, petid: int) -> int:
    cur = conn.execute(
        "UPDATE diet SET name=?, amount=?, description=?, petid=? WHERE dietid=?",
        (name, amount, description, petid, dietid),
    )
    return cur.rowcount


def delete_diet(conn: Connection, dietid: int) -> int:
    return conn.execute("DELETE FROM diet WHERE dietid=?", (dietid,)).rowcount


def get_diet(conn: Connection, dietid: int):
    return conn.execute("SELECT * FROM diet WHERE dietid=?", (dietid,)).fetchone()


def list_diets_by_pet(conn: Connection, petid: int):
    return conn.execute("SELECT * FROM diet WHERE petid=?", (petid,)).fetchall()


# ---- activity ----

def insert_activity(conn: Connection, name: str, description: str | None, petid: int) -> int:
    cur = conn.execute(
        "INSERT INTO activity(name, description, petid) VALUES(?,?,?)",
        (name, description, petid),
    )
    return int(cur.lastrowid)


def update_activity(conn: Connection, activityid: int, name: str, description: str | None, petid: int) -> int:
    cur = conn.execute(
        "UPDATE activity SET name=?, description=?, petid=? WHERE activityid=?",
        (name, description, petid, activityid),
    )
    return cur.rowcount


def delete_activity(conn: Connection, activityid: int) -> int:
    return conn.execute("DELETE FROM activity WHERE activityid=?", (activityid,)).rowcount


def get_activity(conn: Connection, activityid: int):
    return conn.execute("SELECT * FROM activity WHERE activityid=?", (activityid,)).fetchone()


def list_activities_by_pet(conn: Connection, petid: int):
    return conn.execute("SELECT * FROM activity WHERE petid=?", (petid,)).fetchall()
