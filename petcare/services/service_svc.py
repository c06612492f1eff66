from __future__ import annotations

import datetime as dt

from ..db import Database
from ..models import ServiceType, Service, TimeSlot
from ..repository import service_repo
from .utils import db_call, one, many


# ===== service types (managed by admins) =====
def add_service_type(db: Database, type_name: str) -> int:
    with db_call(db, "add_service_type") as conn:
        return service_repo.insert_type(conn, type_name)


def update_service_type(db: Database, typeid: int, type_name: str) -> bool:
    with db_call(db, "update_service_type") as conn:
        return service_repo.update_type(conn, typeid, type_name) > 0


def delete_service_type(db: Database, typeid: int) -> bool:
    with db_call(db, "delete_service_type") as conn:
        return service_repo.delete_type(conn, typeid) > 0


def get_all_service_types(db: Database) -> list[ServiceType]:
    with db_call(db, "get_all_service_types") as conn:
        return many(service_repo.list_types(conn), ServiceType.from_row)


def get_service_type_by_id(db: Database, typeid: int) -> ServiceType | None:
    with db_call(db, "get_service_type_by_id") as conn:
        return one(service_repo.get_type(conn, typeid), ServiceType.from_row)


# ===== services =====
def add_service(
    db: Database,
    name: str,
    price: int | None,
    description: str | None,
    duration: dt.time | None,
    license: bytes | None,
    typeid: int | None,
    providerid: int,
) -> int:
    with db_call(db, "add_service") as conn:
        return service_repo.insert_service(conn, name, price, description, duration, license, typeid, providerid)


def update_service(
    db: Database,
    serviceid: int,
    name: str,
    price: int | None,
    description: str | None,
    duration: dt.time | None,
    license: bytes | None,
    typeid: int | None,
    providerid: int,
) -> bool:
    with db_call(db, "update_service") as conn:
        n = service_repo.update_service(conn, serviceid, name, price, description, duration, license, typeid, providerid)
        return n > 0


def delete_service(db: Database, serviceid: int) -> bool:
    with db_call(db, "delete_service") as conn:
        return service_repo.delete_service(conn, serviceid) > 0


def get_service_by_id(db: Database, serviceid: int) -> Service | None:
    with db_call(db, "get_service_by_id") as conn:
        return one(service_repo.get_service(conn, serviceid), Service.from_row)


def get_all_services(db: Database) -> list[Service]:
    with db_call(db, "get_all_services") as conn:
        return many(service_repo.list_services(conn), Service.from_row)


def get_services_by_provider_id(db: Database, providerid: int) -> list[Service]:
    with db_call(db, "get_services_by_provider_id") as conn:
        return many(service_repo.list_by_provider(conn, providerid), Service.from_row)


def get_services_by_type_id(db: Database, typeid: int) -> list[Service]:
    with db_call(db, "get_services_by_type_id") as conn:
        return many(service_repo.list_by_type(conn, typeid), Service.from_row)


# ===== time slots =====
def add_time_slot(db: Database, serviceid: int, slot: dt.time) -> bool:
    with db_call(db, "add_time_slot") as conn:
        return service_repo.insert_slot(conn, serviceid, slot) > 0


def delete_time_slot(db: Database, serviceid: int, slot: dt.time) -> bool:
    with db_call(db, "delete_time_slot") as conn:
        return service_repo.delete_slot(conn, serviceid, slot) > 0


def get_time_slots_by_service_id(db: Database, serviceid: int) -> list[TimeSlot]:
    with db_call(db, "get_time_slots_by_service_id") as conn:
        return many(service_repo.list_slots_by_service(conn, serviceid), TimeSlot.from_row)


def get_all_time_slots(db: Database) -> list[TimeSlot]:
    with db_call(db, "get_all_time_slots") as conn:
        return many(service_repo.list_slots(conn), TimeSlot.from_row)
