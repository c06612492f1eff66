from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..db import Database
from ..errors import PetCareError
from ..logs import LogContext
from ..services import notification_svc, schedule_svc
from .common import get_db, to_json, ok, not_found, http_error

router = APIRouter()


class NotificationBody(BaseModel):
    text: str


class ScheduleBody(BaseModel):
    scheduled_time: dt.datetime
    tittle: str | None = None
    detail: str | None = None


# ===== notifications =====
@router.get("/api/users/{userid}/notifications")
def api_notification_list(userid: int, db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(n) for n in notification_svc.get_notifications_by_user_id(db, userid)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.post("/api/users/{userid}/notifications", status_code=201)
def api_notification_add(userid: int, body: NotificationBody, db: Database = Depends(get_db)):
    log = LogContext(db, "ADD_NOTIFICATION")
    log.set_payload({"userid": userid, **body.model_dump()})
    try:
        notiid = notification_svc.add_notification(db, userid, body.text)
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("NOTIFICATION", notiid)
    return ok(log, notiid=notiid)


@router.delete("/api/users/{userid}/notifications")
def api_notification_clear(userid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "CLEAR_NOTIFICATIONS")
    log.set_entity("USER", userid)
    try:
        removed = notification_svc.delete_notifications_by_user_id(db, userid)
    except PetCareError as e:
        raise http_error(log, e)
    return ok(log, removed=removed)


@router.put("/api/notifications/{notiid}")
def api_notification_update(notiid: int, body: NotificationBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_NOTIFICATION")
    log.set_entity("NOTIFICATION", notiid)
    log.set_payload(body.model_dump())
    try:
        done = notification_svc.update_notification(db, notiid, body.text)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "notification")
    return ok(log)


@router.delete("/api/notifications/{notiid}")
def api_notification_delete(notiid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_NOTIFICATION")
    log.set_entity("NOTIFICATION", notiid)
    try:
        done = notification_svc.delete_notification(db, notiid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "notification")
    return ok(log)


# ===== personal schedules =====
@router.get("/api/users/{userid}/schedules")
def api_schedule_list(userid: int, db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(s) for s in schedule_svc.get_schedules_by_user_id(db, userid)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.post("/api/users/{userid}/schedules", status_code=201)
def api_schedule_add(userid: int, body: ScheduleBody, db: Database = Depends(get_db)):
    log = LogContext(db, "ADD_SCHEDULE")
    log.set_payload({"userid": userid, **body.model_dump()})
    try:
        sid = schedule_svc.add_schedule(db, body.scheduled_time, body.tittle, body.detail, userid)
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("SCHEDULE", sid)
    return ok(log, scheduleid=sid)


@router.get("/api/schedules/{scheduleid}")
def api_schedule_get(scheduleid: int, db: Database = Depends(get_db)):
    try:
        s = schedule_svc.get_schedule_by_id(db, scheduleid)
    except PetCareError as e:
        raise http_error(None, e)
    if s is None:
        raise HTTPException(status_code=404, detail="schedule_not_found")
    return to_json(s)


@router.delete("/api/schedules/{scheduleid}")
def api_schedule_delete(scheduleid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_SCHEDULE")
    log.set_entity("SCHEDULE", scheduleid)
    try:
        done = schedule_svc.delete_schedule(db, scheduleid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "schedule")
    return ok(log)
