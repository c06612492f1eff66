from __future__ import annotations

import datetime as dt

from ..db import Database
from ..errors import ValidationError
from ..models import PetSchedule, ScheduleTarget
from ..repository import pet_schedule_repo
from .utils import db_call, one, many

REPEAT_OPTIONS = ("never", "daily", "weekly", "monthly")


def _check_fields(repeat_option: str | None, hour: int, minute: int, target) -> str:
    if not isinstance(target, ScheduleTarget):
        raise ValidationError("target must be a ScheduleTarget (diet or activity)")
    try:
        h, m = int(hour), int(minute)
    except (TypeError, ValueError):
        raise ValidationError(f"hour/minute must be integers, got {hour!r}:{minute!r}")
    if not 0 <= h <= 23:
        raise ValidationError(f"hour out of range: {hour}")
    if not 0 <= m <= 59:
        raise ValidationError(f"minute out of range: {minute}")
    opt = (repeat_option or "never").strip().lower()
    if opt not in REPEAT_OPTIONS:
        raise ValidationError(f"unknown repeat option: {repeat_option!r}")
    return opt


def add_pet_schedule(
    db: Database,
    startdate: dt.date | None,
    repeat_option: str | None,
    hour: int,
    minute: int,
    target: ScheduleTarget,
) -> int:
    opt = _check_fields(repeat_option, hour, minute, target)
    dietid, activityid = target.to_columns()
    with db_call(db, "add_pet_schedule") as conn:
        return pet_schedule_repo.insert_schedule(conn, startdate, opt, int(hour), int(minute), dietid, activityid)


def update_pet_schedule(
    db: Database,
    petscheduleid: int,
    startdate: dt.date | None,
    repeat_option: str | None,
    hour: int,
    minute: int,
    target: ScheduleTarget,
) -> bool:
    opt = _check_fields(repeat_option, hour, minute, target)
    dietid, activityid = target.to_columns()
    with db_call(db, "update_pet_schedule") as conn:
        n = pet_schedule_repo.update_schedule(conn, petscheduleid, startdate, opt, int(hour), int(minute), dietid, activityid)
        return n > 0


def delete_pet_schedule(db: Database, petscheduleid: int) -> bool:
    with db_call(db, "delete_pet_schedule") as conn:
        return pet_schedule_repo.delete_schedule(conn, petscheduleid) > 0


def get_pet_schedule_by_id(db: Database, petscheduleid: int) -> PetSchedule | None:
    with db_call(db, "get_pet_schedule_by_id") as conn:
        return one(pet_schedule_repo.get_schedule(conn, petscheduleid), PetSchedule.from_row)


def get_pet_schedules_by_diet_id(db: Database, dietid: int) -> list[PetSchedule]:
    with db_call(db, "get_pet_schedules_by_diet_id") as conn:
        return many(pet_schedule_repo.list_by_diet(conn, dietid), PetSchedule.from_row)


def get_pet_schedules_by_activity_id(db: Database, activityid: int) -> list[PetSchedule]:
    with db_call(db, "get_pet_schedules_by_activity_id") as conn:
        return many(pet_schedule_repo.list_by_activity(conn, activityid), PetSchedule.from_row)
