from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..db import Database
from ..errors import PetCareError
from ..logs import LogContext
from ..services import booking_svc
from .common import get_db, to_json, ok, not_found, http_error, decode_blob

router = APIRouter()


class BookingCreate(BaseModel):
    poid: int
    svid: int
    slot: dt.time
    serve_date: dt.date | None = None
    payment_method: str | None = None
    status: str | None = "pending"
    pet_ids: list[int] = []


class BookingStatus(BaseModel):
    status: str


class UpdateBody(BaseModel):
    no_update: int | None = None
    text: str | None = None
    image_b64: str | None = None


class ReviewBody(BaseModel):
    start: int
    comment: str | None = None


class ReportBody(BaseModel):
    text: str | None = None
    image_b64: str | None = None


@router.post("/api/bookings", status_code=201)
def api_booking_create(body: BookingCreate, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_BOOKING")
    log.set_payload(body.model_dump())
    try:
        bookid = booking_svc.create_booking(
            db, body.poid, body.svid, body.slot, body.serve_date,
            body.payment_method, body.status, body.pet_ids,
        )
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("BOOKING", bookid)
    return ok(log, bookid=bookid)


@router.get("/api/bookings")
def api_booking_list(
    owner_id: int | None = Query(None),
    service_id: int | None = Query(None),
    db: Database = Depends(get_db),
):
    if owner_id is None and service_id is None:
        raise HTTPException(status_code=400, detail="owner_id or service_id is required")
    try:
        if owner_id is not None:
            items = booking_svc.get_bookings_by_pet_owner(db, owner_id)
        else:
            items = booking_svc.get_bookings_by_service_id(db, service_id)
    except PetCareError as e:
        raise http_error(None, e)
    return {"items": [to_json(b) for b in items]}


@router.get("/api/bookings/{bookid}")
def api_booking_get(bookid: int, db: Database = Depends(get_db)):
    try:
        b = booking_svc.get_booking_by_id(db, bookid)
    except PetCareError as e:
        raise http_error(None, e)
    if b is None:
        raise HTTPException(status_code=404, detail="booking_not_found")
    return to_json(b)


@router.put("/api/bookings/{bookid}/status")
def api_booking_status(bookid: int, body: BookingStatus, db: Database = Depends(get_db)):
    log = LogContext(db, "UPDATE_BOOKING_STATUS")
    log.set_entity("BOOKING", bookid)
    log.set_payload(body.model_dump())
    try:
        done = booking_svc.update_booking_status(db, bookid, body.status)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "booking")
    return ok(log)


@router.delete("/api/bookings/{bookid}")
def api_booking_delete(bookid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_BOOKING")
    log.set_entity("BOOKING", bookid)
    try:
        done = booking_svc.delete_booking(db, bookid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "booking")
    return ok(log)


# ===== progress updates =====
@router.get("/api/bookings/{bookid}/updates")
def api_update_list(bookid: int, db: Database = Depends(get_db)):
    try:
        return {"items": [to_json(u) for u in booking_svc.get_service_updates_by_book_id(db, bookid)]}
    except PetCareError as e:
        raise http_error(None, e)


@router.post("/api/bookings/{bookid}/updates", status_code=201)
def api_update_add(bookid: int, body: UpdateBody, db: Database = Depends(get_db)):
    log = LogContext(db, "ADD_SERVICE_UPDATE")
    log.set_entity("BOOKING", bookid)
    log.set_payload(body.model_dump(exclude={"image_b64"}))
    try:
        no = booking_svc.add_service_update(db, bookid, body.no_update, body.text, decode_blob(body.image_b64))
    except PetCareError as e:
        raise http_error(log, e)
    return ok(log, no_update=no)


# ===== review =====
@router.get("/api/bookings/{bookid}/review")
def api_review_get(bookid: int, db: Database = Depends(get_db)):
    try:
        r = booking_svc.get_service_review(db, bookid)
    except PetCareError as e:
        raise http_error(None, e)
    if r is None:
        raise HTTPException(status_code=404, detail="review_not_found")
    return to_json(r)


@router.post("/api/bookings/{bookid}/review", status_code=201)
def api_review_add(bookid: int, body: ReviewBody, db: Database = Depends(get_db)):
    log = LogContext(db, "ADD_SERVICE_REVIEW")
    log.set_entity("BOOKING", bookid)
    log.set_payload(body.model_dump())
    try:
        booking_svc.add_service_review(db, bookid, body.start, body.comment)
    except PetCareError as e:
        raise http_error(log, e)
    return ok(log)


# ===== report =====
@router.get("/api/bookings/{bookid}/report")
def api_report_get(bookid: int, db: Database = Depends(get_db)):
    try:
        r = booking_svc.get_service_report(db, bookid)
    except PetCareError as e:
        raise http_error(None, e)
    if r is None:
        raise HTTPException(status_code=404, detail="report_not_found")
    return to_json(r)


@router.post("/api/bookings/{bookid}/report", status_code=201)
def api_report_add(bookid: int, body: ReportBody, db: Database = Depends(get_db)):
    log = LogContext(db, "ADD_SERVICE_REPORT")
    log.set_entity("BOOKING", bookid)
    log.set_payload(body.model_dump(exclude={"image_b64"}))
    try:
        booking_svc.add_service_report(db, bookid, body.text, decode_blob(body.image_b64))
    except PetCareError as e:
        raise http_error(log, e)
    return ok(log)
