from __future__ import annotations

import datetime as dt

from ..db import Database
from ..models import Schedule
from ..repository import schedule_repo
from .utils import db_call, one, many


def add_schedule(db: Database, scheduled_time: dt.datetime | None, tittle: str | None, detail: str | None, userid: int) -> int:
    with db_call(db, "add_schedule") as conn:
        return schedule_repo.insert_schedule(conn, scheduled_time, tittle, detail, userid)


def update_schedule(
    db: Database,
    scheduleid: int,
    scheduled_time: dt.datetime | None,
    tittle: str | None,
    detail: str | None,
    userid: int,
) -> bool:
    with db_call(db, "update_schedule") as conn:
        return schedule_repo.update_schedule(conn, scheduleid, scheduled_time, tittle, detail, userid) > 0


def delete_schedule(db: Database, scheduleid: int) -> bool:
    with db_call(db, "delete_schedule") as conn:
        return schedule_repo.delete_schedule(conn, scheduleid) > 0


def get_schedule_by_id(db: Database, scheduleid: int) -> Schedule | None:
    with db_call(db, "get_schedule_by_id") as conn:
        return one(schedule_repo.get_schedule(conn, scheduleid), Schedule.from_row)


def get_schedules_by_user_id(db: Database, userid: int) -> list[Schedule]:
    with db_call(db, "get_schedules_by_user_id") as conn:
        return many(schedule_repo.list_by_user(conn, userid), Schedule.from_row)
