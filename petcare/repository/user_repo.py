from __future__ import annotations

from sqlite3 import Connection

# role -> subtype table sharing the user's id
ROLE_TABLES = {
    "manager": "manager",
    "pet owner": "petowner",
    "service provider": "serviceprovider",
}


def insert_user(conn: Connection, name: str, email: str, password: str, gender: str | None, role: str) -> int:
    cur = conn.execute(
        "INSERT INTO user(name, email, password, gender, role) VALUES(?,?,?,?,?)",
        (name, email, password, gender, role),
    )
    return int(cur.lastrowid)


def insert_role_row(conn: Connection, role: str, userid: int) -> None:
    table = ROLE_TABLES[role]
    conn.execute(f"INSERT INTO {table}(id) VALUES(?)", (userid,))


def get_by_id(conn: Connection, userid: int):
    return conn.execute("SELECT * FROM user WHERE userid=?", (userid,)).fetchone()


def get_by_email(conn: Connection, email: str):
    return conn.execute("SELECT * FROM user WHERE email=?", (email,)).fetchone()


def list_all(conn: Connection):
    return conn.execute("SELECT * FROM user").fetchall()


def update_user(conn: Connection, userid: int, name: str, email: str, password: str, gender: str | None, role: str) -> int:
    cur = conn.execute(
        "UPDATE user SET name=?, email=?, password=?, gender=?, role=? WHERE userid=?",
        (name, email, password, gender, role, userid),
    )
    return cur.rowcount


def delete_user(conn: Connection, userid: int) -> int:
    return conn.execute("DELETE FROM user WHERE userid=?", (userid,)).rowcount


# ---- manager ----

def get_manager(conn: Connection, id: int):
    return conn.execute("SELECT * FROM manager WHERE id=?", (id,)).fetchone()


def list_managers(conn: Connection):
    return conn.execute("SELECT * FROM manager").fetchall()


# ---- pet owner ----

def update_pet_owner(conn: Connection, id: int, phone: str | None, city: str | None, address: str | None) -> int:
    cur = conn.execute(
        "UPDATE petowner SET phone=?, city=?, address=? WHERE id=?",
        (phone, city, address, id),
    )
    return cur.rowcount


def get_pet_owner(conn: Connection, id: int):
    return conn.execute("SELECT * FROM petowner WHERE id=?", (id,)).fetchone()


def list_pet_owners(conn: Connection):
    return conn.execute("SELECT * FROM petowner").fetchall()


# ---- service provider ----

def update_service_provider(
    conn: Connection,
    id: int,
    business_name: str | None,
    logo: bytes | None,
    phone: str | None,
    description: str | None,
    address: str | None,
    website: str | None,
) -> int:
    cur = conn.execute(
        "UPDATE serviceprovider SET bussiness_name=?, logo=?, phone=?, description=?, address=?, website=? "
        "WHERE id=?",
        (business_name, logo, phone, description, address, website, id),
    )
    return cur.rowcount


def get_service_provider(conn: Connection, id: int):
    return conn.execute("SELECT * FROM serviceprovider WHERE id=?", (id,)).fetchone()


def list_service_providers(conn: Connection):
    return conn.execute("SELECT * FROM serviceprovider").fetchall()
