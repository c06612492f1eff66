from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..db import Database
from ..errors import PetCareError
from ..logs import LogContext
from ..services import service_svc
from .common import get_db, to_json, ok, not_found, http_error, decode_blob

router = APIRouter()


class ServiceTypeBody(BaseModel):
    type: str


class ServiceBody(BaseModel):
    name: str
    price: int | None = None
    description: str | None = None
    duration: dt.time | None = None
    license_b64: str | None = None
    typeid: int | None = None
    providerid: int


class SlotBody(BaseModel):
    slot: dt.time


# ===== service types =====
@router.get("/api/service-types")
def api_service_type_list(db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(t) for t in service_svc.get_all_service_types(db)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.post("/api/service-types", status_code=201)
def api_service_type_create(body: ServiceTypeBody, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_SERVICE_TYPE")
    log.set_payload(body.model_dump())
    try:
        typeid = service_svc.add_service_type(db, body.type)
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("SERVICE_TYPE", typeid)
    return ok(log, typeid=typeid)


@router.put("/api/service-types/{typeid}")
def api_service_type_update(typeid: int, body: ServiceTypeBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_SERVICE_TYPE")
    log.set_entity("SERVICE_TYPE", typeid)
    log.set_payload(body.model_dump())
    try:
        done = service_svc.update_service_type(db, typeid, body.type)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "service_type")
    return ok(log)


@router.delete("/api/service-types/{typeid}")
def api_service_type_delete(typeid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_SERVICE_TYPE")
    log.set_entity("SERVICE_TYPE", typeid)
    try:
        done = service_svc.delete_service_type(db, typeid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "service_type")
    return ok(log)


# ===== services =====
@router.get("/api/services")
def api_service_list(
    provider_id: int | None = Query(None),
    type_id: int | None = Query(None),
    db: Database = Depends(get_db),
):
    try:
        if provider_id is not None:
            items = service_svc.get_services_by_provider_id(db, provider_id)
        elif type_id is not None:
            items = service_svc.get_services_by_type_id(db, type_id)
        else:
            items = service_svc.get_all_services(db)
    except PetCareError as e:
        raise http_error(None, e)
    return {"items": [to_json(s) for s in items]}


@router.post("/api/services", status_code=201)
def api_service_create(body: ServiceBody, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_SERVICE")
    log.set_payload(body.model_dump(exclude={"license_b64"}))
    try:
        sid = service_svc.add_service(
            db, body.name, body.price, body.description, body.duration,
            decode_blob(body.license_b64), body.typeid, body.providerid,
        )
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("SERVICE", sid)
    return ok(log, serviceid=sid)


@router.get("/api/services/{serviceid}")
def api_service_get(serviceid: int, db: Database = Depends(get_db)):
    try:
        s = service_svc.get_service_by_id(db, serviceid)
    except PetCareError as e:
        raise http_error(None, e)
    if s is None:
        raise HTTPException(status_code=404, detail="service_not_found")
    return to_json(s)


@router.put("/api/services/{serviceid}")
def api_service_update(serviceid: int, body: ServiceBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_SERVICE")
    log.set_entity("SERVICE", serviceid)
    log.set_payload(body.model_dump(exclude={"license_b64"}))
    try:
        done = service_svc.update_service(
            db, serviceid, body.name, body.price, body.description, body.duration,
            decode_blob(body.license_b64), body.typeid, body.providerid,
        )
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "service")
    return ok(log)


@router.delete("/api/services/{serviceid}")
def api_service_delete(serviceid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_SERVICE")
    log.set_entity("SERVICE", serviceid)
    try:
        done = service_svc.delete_service(db, serviceid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "service")
    return ok(log)


# ===== time slots =====
@router.get("/api/services/{serviceid}/slots")
def api_slot_list(serviceid: int, db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(s) for s in service_svc.get_time_slots_by_service_id(db, serviceid)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.post("/api/services/{serviceid}/slots", status_code=201)
def api_slot_add(serviceid: int, body: SlotBody, db: Database = Depends(get_db)):
    log = LogContext(db, "ADD_TIME_SLOT")
    log.set_entity("SERVICE", serviceid)
    log.set_payload(body.model_dump())
    try:
        service_svc.add_time_slot(db, serviceid, body.slot)
    except PetCareError as e:
        raise http_error(log, e)
    return ok(log)


@router.delete("/api/services/{serviceid}/slots/{slot}")
def api_slot_delete(serviceid: int, slot: dt.time, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_TIME_SLOT")
    log.set_entity("SERVICE", serviceid)
    log.set_payload({"slot": slot.isoformat()})
    try:
        done = service_svc.delete_time_slot(db, serviceid, slot)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "time_slot")
    return ok(log)
