from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..db import Database
from ..errors import PetCareError
from ..logs import LogContext
from ..services import user_svc
from .common import get_db, to_json, ok, not_found, http_error, decode_blob

router = APIRouter()


class UserBody(BaseModel):
    name: str
    email: str
    password: str
    gender: str | None = None
    role: str


class PetOwnerBody(BaseModel):
    phone: str | None = None
    city: str | None = None
    address: str | None = None


class ServiceProviderBody(BaseModel):
    business_name: str | None = None
    logo_b64: str | None = None
    phone: str | None = None
    description: str | None = None
    address: str | None = None
    website: str | None = None


def _user_out(u) -> dict:
    d = to_json(u)
    d.pop("password", None)
    return d


@router.post("/api/users", status_code=201)
def api_user_create(body: UserBody, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_USER")
    log.set_payload(body.model_dump(exclude={"password"}))
    try:
        userid = user_svc.create_user(db, body.name, body.email, body.password, body.gender, body.role)
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("USER", userid)
    return ok(log, userid=userid)


@router.get("/api/users")
def api_user_list(db: Database = Depends(get_db)):
    try:
        return {"items": [_user_out(u) for u in user_svc.get_all_users(db)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.get("/api/users/{userid}")
def api_user_get(userid: int, db: Database = Depends(get_db)):
    try:
        u = user_svc.get_user_by_id(db, userid)
    except PetCareError as e:
        raise http_error(None, e)
    if u is None:
        raise HTTPException(status_code=404, detail="user_not_found")
    return _user_out(u)


@router.put("/api/users/{userid}")
def api_user_update(userid: int, body: UserBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_USER")
    log.set_entity("USER", userid)
    log.set_payload(body.model_dump(exclude={"password"}))
    try:
        done = user_svc.update_user(db, userid, body.name, body.email, body.password, body.gender, body.role)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "user")
    return ok(log)


@router.delete("/api/users/{userid}")
def api_user_delete(userid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_USER")
    log.set_entity("USER", userid)
    try:
        done = user_svc.delete_user(db, userid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "user")
    return ok(log)


@router.get("/api/managers")
def api_manager_list(db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(m) for m in user_svc.get_all_managers(db)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.get("/api/pet-owners/{id}")
def api_pet_owner_get(id: int, db: Database = Depends(get_db)):
    try:
        po = user_svc.get_pet_owner_by_id(db, id)
    except PetCareError as e:
        raise http_error(None, e)
    if po is None:
        raise HTTPException(status_code=404, detail="pet_owner_not_found")
    return to_json(po)


@router.put("/api/pet-owners/{id}")
def api_pet_owner_update(id: int, body: PetOwnerBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_PET_OWNER")
    log.set_entity("PET_OWNER", id)
    log.set_payload(body.model_dump())
    try:
        done = user_svc.update_pet_owner(db, id, body.phone, body.city, body.address)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "pet_owner")
    return ok(log)


@router.get("/api/service-providers/{id}")
def api_service_provider_get(id: int, db: Database = Depends(get_db)):
    try:
        sp = user_svc.get_service_provider_by_id(db, id)
    except PetCareError as e:
        raise http_error(None, e)
    if sp is None:
        raise HTTPException(status_code=404, detail="service_provider_not_found")
    return to_json(sp)


@router.put("/api/service-providers/{id}")
def api_service_provider_update(id: int, body: ServiceProviderBody, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_SERVICE_PROVIDER")
    log.set_entity("SERVICE_PROVIDER", id)
    log.set_payload(body.model_dump(exclude={"logo_b64"}))
    try:
        done = user_svc.update_service_provider(
            db, id, body.business_name, decode_blob(body.logo_b64), body.phone,
            body.description, body.address, body.website,
        )
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "service_provider")
    return ok(log)
