from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..db import Database
from ..errors import PetCareError
from ..logs import LogContext
from ..services import ticket_svc
from .common import get_db, to_json, ok, not_found, http_error, decode_blob

router = APIRouter()


class TicketCreate(BaseModel):
    userid: int
    subject: str
    description: str | None = None
    attachment_b64: str | None = None


class TicketEdit(BaseModel):
    subject: str
    description: str | None = None
    attachment_b64: str | None = None


class TicketAssign(BaseModel):
    managerid: int


class TicketResponse(BaseModel):
    response: str | None = None
    status: str


@router.post("/api/tickets", status_code=201)
def api_ticket_create(body: TicketCreate, db: Database = Depends(get_db)):
    log = LogContext(db, "CREATE_TICKET")
    log.set_payload(body.model_dump(exclude={"attachment_b64"}))
    try:
        tid = ticket_svc.create_ticket(db, body.userid, body.subject, body.description, decode_blob(body.attachment_b64))
    except PetCareError as e:
        raise http_error(log, e)
    log.set_entity("TICKET", tid)
    return ok(log, ticketid=tid)


@router.get("/api/tickets")
def api_ticket_list(
    user_id: int | None = Query(None),
    manager_id: int | None = Query(None),
    db: Database = Depends(get_db),
):
    try:
        if user_id is not None:
            items = ticket_svc.get_tickets_by_user_id(db, user_id)
        elif manager_id is not None:
            items = ticket_svc.get_tickets_by_manager_id(db, manager_id)
        else:
            items = ticket_svc.get_all_tickets(db)
    except PetCareError as e:
        raise http_error(None, e)
    return {"items": [to_json(t) for t in items]}


@router.get("/api/tickets/{ticketid}")
def api_ticket_get(ticketid: int, db: Database = Depends(get_db)):
    try:
        t = ticket_svc.get_ticket_by_id(db, ticketid)
    except PetCareError as e:
        raise http_error(None, e)
    if t is None:
        raise HTTPException(status_code=404, detail="ticket_not_found")
    return to_json(t)


@router.put("/api/tickets/{ticketid}")
def api_ticket_edit(ticketid: int, body: TicketEdit, db: Database = Depends(get_db)):
    log = LogContext(db, "EDIT_TICKET")
    log.set_entity("TICKET", ticketid)
    log.set_payload(body.model_dump(exclude={"attachment_b64"}))
    try:
        done = ticket_svc.update_ticket(db, ticketid, body.subject, body.description, decode_blob(body.attachment_b64))
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        # 不存在或已分配给管理员
        raise not_found(log, "unassigned_ticket")
    return ok(log)


@router.post("/api/tickets/{ticketid}/assign")
def api_ticket_assign(ticketid: int, body: TicketAssign, db: Database = Depends(get_db)):
    log = LogContext(db, "ASSIGN_TICKET")
    log.set_entity("TICKET", ticketid)
    log.set_payload(body.model_dump())
    try:
        done = ticket_svc.assign_ticket(db, ticketid, body.managerid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "ticket")
    return ok(log)


@router.post("/api/tickets/{ticketid}/response")
def api_ticket_response(ticketid: int, body: TicketResponse, db: Database = Depends(get_db)):
    log = LogContext(db, "RESPOND_TICKET")
    log.set_entity("TICKET", ticketid)
    log.set_payload(body.model_dump())
    try:
        done = ticket_svc.update_ticket_response(db, ticketid, body.response, body.status)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "ticket")
    return ok(log)


@router.delete("/api/tickets/{ticketid}")
def api_ticket_delete(ticketid: int, db: Database = Depends(get_db)):
    log = LogContext(db, "DELETE_TICKET")
    log.set_entity("TICKET", ticketid)
    try:
        done = ticket_svc.delete_ticket(db, ticketid)
    except PetCareError as e:
        raise http_error(log, e)
    if not done:
        raise not_found(log, "ticket")
    return ok(log)
