from __future__ import annotations

import datetime as dt

from ..db import Database
from ..models import Pet, Diet, Activity
from ..repository import pet_repo
from .utils import db_call, one, many


def add_pet(
    db: Database,
    name: str,
    breed: str,
    description: str | None,
    picture: bytes | None,
    age: int | None,
    dob: dt.date | None,
    userid: int,
) -> int:
    with db_call(db, "add_pet") as conn:
        return pet_repo.insert_pet(conn, name, breed, description, picture, age, dob, userid)


def update_pet(
    db: Database,
    petid: int,
    name: str,
    breed: str,
    description: str | None,
    picture: bytes | None,
    age: int | None,
    dob: dt.date | None,
    userid: int,
) -> bool:
    with db_call(db, "update_pet") as conn:
        return pet_repo.update_pet(conn, petid, name, breed, description, picture, age, dob, userid) > 0


def delete_pet(db: Database, petid: int) -> bool:
    with db_call(db, "delete_pet") as conn:
        return pet_repo.delete_pet(conn, petid) > 0


def get_pet_by_id(db: Database, petid: int) -> Pet | None:
    with db_call(db, "get_pet_by_id") as conn:
        return one(pet_repo.get_pet(conn, petid), Pet.from_row)


def get_all_pets(db: Database) -> list[Pet]:
    with db_call(db, "get_all_pets") as conn:
        return many(pet_repo.list_pets(conn), Pet.from_row)


def get_pets_by_user_id(db: Database, userid: int) -> list[Pet]:
    with db_call(db, "get_pets_by_user_id") as conn:
        return many(pet_repo.list_pets_by_user(conn, userid), Pet.from_row)


# ===== diets =====
def add_diet(db: Database, name: str, amount: str | None, description: str | None, petid: int) -> int:
    with db_call(db, "add_diet") as conn:
        return pet_repo.insert_diet(conn, name, amount, description, petid)


def update_diet(db: Database, dietid: int, name: str, amount: str | None, description: str | None, petid: int) -> bool:
    with db_call(db, "update_diet") as conn:
        return pet_repo.update_diet(conn, dietid, name, amount, description, petid) > 0


def delete_diet(db: Database, dietid: int) -> bool:
    with db_call(db, "delete_diet") as conn:
        return pet_repo.delete_diet(conn, dietid) > 0


def get_diet_by_id(db: Database, dietid: int) -> Diet | None:
    with db_call(db, "get_diet_by_id") as conn:
        return one(pet_repo.get_diet(conn, dietid), Diet.from_row)


def get_diets_by_pet_id(db: Database, petid: int) -> list[Diet]:
    with db_call(db, "get_diets_by_pet_id") as conn:
        return many(pet_repo.list_diets_by_pet(conn, petid), Diet.from_row)


# ===== activities =====
def add_activity(db: Database, name: str, description: str | None, petid: int) -> int:
    with db_call(db, "add_activity") as conn:
        return pet_repo.insert_activity(conn, name, description, petid)


def update_activity(db: Database, activityid: int, name: str, description: str | None, petid: int) -> bool:
    with db_call(db, "update_activity") as conn:
        return pet_repo.update_activity(conn, activityid, name, description, petid) > 0


def delete_activity(db: Database, activityid: int) -> bool:
    with db_call(db, "delete_activity") as conn:
        return pet_repo.delete_activity(conn, activityid) > 0


def get_activity_by_id(db: Database, activityid: int) -> Activity | None:
    with db_call(db, "get_activity_by_id") as conn:
        return one(pet_repo.get_activity(conn, activityid), Activity.from_row)


def get_activities_by_pet_id(db: Database, petid: int) -> list[Activity]:
    with db_call(db, "get_activities_by_pet_id") as conn:
        return many(pet_repo.list_activities_by_pet(conn, petid), Activity.from_row)
