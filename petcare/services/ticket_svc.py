from __future__ import annotations

import datetime as dt
import logging

from ..db import Database
from ..models import Ticket, TicketStatus
from ..repository import ticket_repo
from .utils import db_call, one, many

logger = logging.getLogger(__name__)


def create_ticket(db: Database, userid: int, subject: str | None, description: str | None, attachment: bytes | None = None) -> int:
    """New tickets always start as pending with no manager."""
    with db_call(db, "create_ticket") as conn:
        return ticket_repo.insert_ticket(conn, userid, subject, description, attachment)


def assign_ticket(db: Database, ticketid: int, managerid: int) -> bool:
    """Hand a ticket to a manager and move it to solving.

    Allowed from pending and from solving (re-assignment overwrites the
    previous manager and assignment time). A resolved ticket raises
    IllegalTransitionError. Returns False when the ticket does not exist.
    """
    with db_call(db, "assign_ticket", atomic=True) as conn:
        current = ticket_repo.get_status(conn, ticketid)
        if current is None:
            return False
        TicketStatus(current).check_move_to(TicketStatus.SOLVING)
        n = ticket_repo.assign(conn, ticketid, managerid, dt.datetime.now().replace(microsecond=0))
    logger.info(f"ticket {ticketid} assigned to manager {managerid}")
    return n > 0


def update_ticket_response(db: Database, ticketid: int, response: str | None, status: TicketStatus | str) -> bool:
    target = TicketStatus.resolve(status)
    with db_call(db, "update_ticket_response", atomic=True) as conn:
        current = ticket_repo.get_status(conn, ticketid)
        if current is None:
            return False
        TicketStatus(current).check_move_to(target)
        return ticket_repo.update_response(conn, ticketid, response, target.value, current) > 0


def update_ticket(db: Database, ticketid: int, subject: str | None, description: str | None, attachment: bytes | None) -> bool:
    """Edit by the submitting user; only possible while no manager holds the ticket."""
    with db_call(db, "update_ticket") as conn:
        return ticket_repo.update_unassigned(conn, ticketid, subject, description, attachment) > 0


def get_ticket_by_id(db: Database, ticketid: int) -> Ticket | None:
    with db_call(db, "get_ticket_by_id") as conn:
        return one(ticket_repo.get_by_id(conn, ticketid), Ticket.from_row)


def get_all_tickets(db: Database) -> list[Ticket]:
    with db_call(db, "get_all_tickets") as conn:
        return many(ticket_repo.list_all(conn), Ticket.from_row)


def get_tickets_by_user_id(db: Database, userid: int) -> list[Ticket]:
    with db_call(db, "get_tickets_by_user_id") as conn:
        return many(ticket_repo.list_by_user(conn, userid), Ticket.from_row)


def get_tickets_by_manager_id(db: Database, managerid: int) -> list[Ticket]:
    with db_call(db, "get_tickets_by_manager_id") as conn:
        return many(ticket_repo.list_by_manager(conn, managerid), Ticket.from_row)


def delete_ticket(db: Database, ticketid: int) -> bool:
    with db_call(db, "delete_ticket") as conn:
        return ticket_repo.delete_ticket(conn, ticketid) > 0
