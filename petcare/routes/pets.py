from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..db import Database
from ..errors import PetCareError, ValidationError
from ..logs import LogContext
from ..models import ScheduleTarget, TargetKind
from ..services import pet_svc, pet_schedule_svc
from .common import get_db, to_json, ok, not_found, http_error, decode_blob

router = APIRouter()


class PetBody(BaseModel):
    name: str
    breed: str
    description: str | None = None
    picture_b64: str | None = None
    age: int | None = None
    dob: dt.date | None = None
    userid: int


class DietBody(BaseModel):
    name: str
    amount: str | None = None
    description: str | None = None


class ActivityBody(BaseModel):
    name: str
    description: str | None = None


class PetScheduleBody(BaseModel):
    startdate: dt.date | None = None
    repeat_option: str = "never"
    hour: int
    minute: int
    target_kind: TargetKind
    target_id: int


# ===== pets =====
@router.get("/api/pets")
def api_pet_list(user_id: int | None = Query(None), db: Database = Depends(get_db)):
    try:
        pets = pet_svc.get_pets_by_user_id(db, user_id) if user_id is not None else pet_svc.get_all_pets(db)
    except PetCareError as e:
        raise http_error(None, e)
    return {"items": [to_json(p) for p in pets]}


@router.post("/api/pets", status_code=201)
def api_pet_create(body: PetBody, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_PET")
    log.set_payload(body.model_dump(exclude={"picture_b64"}))
    try:
        petid = pet_svc.add_pet(
            db, body.name, body.breed, body.description, decode_blob(body.picture_b64),
            body.age, body.dob, body.userid,
        )
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("PET", petid)
    return ok(log, petid=petid)


@router.get("/api/pets/{petid}")
def api_pet_get(petid: int, db: Database = Depends(get_db)):
    try:
        pet = pet_svc.get_pet_by_id(db, petid)
    except PetCareError as e:
        raise http_error(None, e)
    if pet is None:
        raise HTTPException(status_code=404, detail="pet_not_found")
    return to_json(pet)


@router.put("/api/pets/{petid}")
def api_pet_update(petid: int, body: PetBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_PET")
    log.set_entity("PET", petid)
    log.set_payload(body.model_dump(exclude={"picture_b64"}))
    try:
        done = pet_svc.update_pet(
            db, petid, body.name, body.breed, body.description, decode_blob(body.picture_b64),
            body.age, body.dob, body.userid,
        )
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "pet")
    return ok(log)


@router.delete("/api/pets/{petid}")
def api_pet_delete(petid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_PET")
    log.set_entity("PET", petid)
    try:
        done = pet_svc.delete_pet(db, petid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "pet")
    return ok(log)


# ===== diets =====
@router.get("/api/pets/{petid}/diets")
def api_diet_list(petid: int, db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(d) for d in pet_svc.get_diets_by_pet_id(db, petid)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.post("/api/pets/{petid}/diets", status_code=201)
def api_diet_create(petid: int, body: DietBody, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_DIET")
    log.set_payload({"petid": petid, **body.model_dump()})
    try:
        dietid = pet_svc.add_diet(db, body.name, body.amount, body.description, petid)
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("DIET", dietid)
    return ok(log, dietid=dietid)


@router.get("/api/diets/{dietid}")
def api_diet_get(dietid: int, db: Database = Depends(get_db)):
    try:
        d = pet_svc.get_diet_by_id(db, dietid)
    except PetCareError as e:
        raise http_error(None, e)
    if d is None:
        raise HTTPException(status_code=404, detail="diet_not_found")
    return to_json(d)


@router.put("/api/diets/{dietid}")
def api_diet_update(dietid: int, body: DietBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_DIET")
    log.set_entity("DIET", dietid)
    log.set_payload(body.model_dump())
    try:
        before = pet_svc.get_diet_by_id(db, dietid)
        if before is None:
            raise not_found(log, "diet")
        log.set_before(to_json(before))
        done = pet_svc.update_diet(db, dietid, body.name, body.amount, body.description, before.petid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "diet")
    return ok(log)


@router.delete("/api/diets/{dietid}")
def api_diet_delete(dietid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_DIET")
    log.set_entity("DIET", dietid)
    try:
        done = pet_svc.delete_diet(db, dietid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "diet")
    return ok(log)


# ===== activities =====
@router.get("/api/pets/{petid}/activities")
def api_activity_list(petid: int, db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(a) for a in pet_svc.get_activities_by_pet_id(db, petid)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.post("/api/pets/{petid}/activities", status_code=201)
def api_activity_create(petid: int, body: ActivityBody, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_ACTIVITY")
    log.set_payload({"petid": petid, **body.model_dump()})
    try:
        activityid = pet_svc.add_activity(db, body.name, body.description, petid)
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("ACTIVITY", activityid)
    return ok(log, activityid=activityid)


@router.get("/api/activities/{activityid}")
def api_activity_get(activityid: int, db: Database = Depends(get_db)):
    try:
        a = pet_svc.get_activity_by_id(db, activityid)
    except PetCareError as e:
        raise http_error(None, e)
    if a is None:
        raise HTTPException(status_code=404, detail="activity_not_found")
    return to_json(a)


@router.put("/api/activities/{activityid}")
def api_activity_update(activityid: int, body: ActivityBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_ACTIVITY")
    log.set_entity("ACTIVITY", activityid)
    log.set_payload(body.model_dump())
    try:
        before = pet_svc.get_activity_by_id(db, activityid)
        if before is None:
            raise not_found(log, "activity")
        log.set_before(to_json(before))
        done = pet_svc.update_activity(db, activityid, body.name, body.description, before.petid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "activity")
    return ok(log)


@router.delete("/api/activities/{activityid}")
def api_activity_delete(activityid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_ACTIVITY")
    log.set_entity("ACTIVITY", activityid)
    try:
        done = pet_svc.delete_activity(db, activityid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "activity")
    return ok(log)


# ===== pet schedules =====
@router.get("/api/pet-schedules")
def api_pet_schedule_list(
    diet_id: int | None = Query(None),
    activity_id: int | None = Query(None),
    db: Database = Depends(get_db),
):
    try:
        if (diet_id is None) == (activity_id is None):
            raise ValidationError("exactly one of diet_id/activity_id is required")
        if diet_id is not None:
            items = pet_schedule_svc.get_pet_schedules_by_diet_id(db, diet_id)
        else:
            items = pet_schedule_svc.get_pet_schedules_by_activity_id(db, activity_id)
    except PetCareError as e:
        raise http_error(None, e)
    return {"items": [to_json(s) for s in items]}


@router.post("/api/pet-schedules", status_code=201)
def api_pet_schedule_create(body: PetScheduleBody, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_PET_SCHEDULE")
    log.set_payload(body.model_dump())
    target = ScheduleTarget(body.target_kind, body.target_id)
    try:
        sid = pet_schedule_svc.add_pet_schedule(db, body.startdate, body.repeat_option, body.hour, body.minute, target)
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("PET_SCHEDULE", sid)
    return ok(log, petscheduleid=sid)


@router.get("/api/pet-schedules/{sid}")
def api_pet_schedule_get(sid: int, db: Database = Depends(get_db)):
    try:
        s = pet_schedule_svc.get_pet_schedule_by_id(db, sid)
    except PetCareError as e:
        raise http_error(None, e)
    if s is None:
        raise HTTPException(status_code=404, detail="pet_schedule_not_found")
    return to_json(s)


@router.put("/api/pet-schedules/{sid}")
def api_pet_schedule_update(sid: int, body: PetScheduleBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_PET_SCHEDULE")
    log.set_entity("PET_SCHEDULE", sid)
    log.set_payload(body.model_dump())
    target = ScheduleTarget(body.target_kind, body.target_id)
    try:
        done = pet_schedule_svc.update_pet_schedule(db, sid, body.startdate, body.repeat_option, body.hour, body.minute, target)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "pet_schedule")
    return ok(log)


@router.delete("/api/pet-schedules/{sid}")
def api_pet_schedule_delete(sid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_PET_SCHEDULE")
    log.set_entity("PET_SCHEDULE", sid)
    try:
        done = pet_schedule_svc.delete_pet_schedule(db, sid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "pet_schedule")
    return ok(log)
