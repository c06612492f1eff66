from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable

from ..db import Database
from ..errors import ValidationError, ConstraintError, NotFoundError
from ..models import Booking, ServiceReport, ServiceReview, ServiceUpdate
from ..repository import booking_repo
from .utils import db_call, one, many

logger = logging.getLogger(__name__)


def _check_rating(start: int) -> int:
    if isinstance(start, bool) or not isinstance(start, int) or not 1 <= start <= 5:
        raise ValidationError(f"rating must be an integer 1-5, got {start!r}")
    return start


def add_booking(
    db: Database,
    poid: int,
    svid: int,
    slot: dt.time,
    serve_date: dt.date | None,
    payment_method: str | None,
    status: str | None,
) -> int:
    """Book one of a service's time slots; book_timestamp is stamped by the database."""
    return create_booking(db, poid, svid, slot, serve_date, payment_method, status, ())


def create_booking(
    db: Database,
    poid: int,
    svid: int,
    slot: dt.time,
    serve_date: dt.date | None,
    payment_method: str | None,
    status: str | None,
    pet_ids: Iterable[int],
) -> int:
    """Insert a booking together with its pets, all or nothing.

    Raises ConstraintError when the slot is already held on that date by a
    booking that is not cancelled, and ValidationError when a pet does not
    belong to the booking owner.
    """
    pet_ids = list(dict.fromkeys(pet_ids))
    with db_call(db, "create_booking", immediate=True) as conn:
        taken = booking_repo.find_active_booking(conn, svid, slot, serve_date)
        if taken is not None:
            raise ConstraintError(f"slot {slot} of service {svid} already booked on {serve_date} (booking {taken})")
        for petid in pet_ids:
            if not booking_repo.pet_owned_by(conn, petid, poid):
                raise ValidationError(f"pet {petid} not found or not owned by {poid}")
        bookid = booking_repo.insert_booking(conn, poid, svid, slot, serve_date, payment_method, status)
        for petid in pet_ids:
            booking_repo.insert_booking_pet(conn, bookid, petid)
    logger.info(f"booking {bookid} created for owner {poid} with pets {pet_ids}")
    return bookid


def get_booking_by_id(db: Database, bookid: int) -> Booking | None:
    with db_call(db, "get_booking_by_id") as conn:
        b = one(booking_repo.get_booking(conn, bookid), Booking.from_row)
        if b is not None:
            b.pet_ids = booking_repo.list_pet_ids(conn, bookid)
        return b


def get_bookings_by_pet_owner(db: Database, poid: int) -> list[Booking]:
    with db_call(db, "get_bookings_by_pet_owner") as conn:
        return many(booking_repo.list_by_owner(conn, poid), Booking.from_row)


def get_bookings_by_service_id(db: Database, svid: int) -> list[Booking]:
    with db_call(db, "get_bookings_by_service_id") as conn:
        return many(booking_repo.list_by_service(conn, svid), Booking.from_row)


def update_booking_status(db: Database, bookid: int, status: str) -> bool:
    with db_call(db, "update_booking_status") as conn:
        return booking_repo.update_status(conn, bookid, status) > 0


def delete_booking(db: Database, bookid: int) -> bool:
    with db_call(db, "delete_booking") as conn:
        return booking_repo.delete_booking(conn, bookid) > 0


# ===== pets on a booking =====
def add_booking_pet(db: Database, bookid: int, petid: int) -> bool:
    with db_call(db, "add_booking_pet") as conn:
        return booking_repo.insert_booking_pet(conn, bookid, petid) > 0


def remove_booking_pet(db: Database, bookid: int, petid: int) -> bool:
    with db_call(db, "remove_booking_pet") as conn:
        return booking_repo.delete_booking_pet(conn, bookid, petid) > 0


def get_pet_ids_by_booking_id(db: Database, bookid: int) -> list[int]:
    with db_call(db, "get_pet_ids_by_booking_id") as conn:
        return booking_repo.list_pet_ids(conn, bookid)


# ===== service report (1:1 with booking) =====
def add_service_report(db: Database, bookid: int, text: str | None, image: bytes | None = None) -> bool:
    with db_call(db, "add_service_report") as conn:
        return booking_repo.insert_report(conn, bookid, text, image) > 0


def update_service_report(db: Database, bookid: int, text: str | None, image: bytes | None) -> bool:
    with db_call(db, "update_service_report") as conn:
        return booking_repo.update_report(conn, bookid, text, image) > 0


def delete_service_report(db: Database, bookid: int) -> bool:
    with db_call(db, "delete_service_report") as conn:
        return booking_repo.delete_report(conn, bookid) > 0


def get_service_report(db: Database, bookid: int) -> ServiceReport | None:
    with db_call(db, "get_service_report") as conn:
        return one(booking_repo.get_report(conn, bookid), ServiceReport.from_row)


# ===== service review (1:1 with booking) =====
def add_service_review(db: Database, bookid: int, start: int, comment: str | None) -> bool:
    _check_rating(start)
    with db_call(db, "add_service_review") as conn:
        return booking_repo.insert_review(conn, bookid, start, comment) > 0


def update_service_review(db: Database, bookid: int, start: int, comment: str | None) -> bool:
    _check_rating(start)
    with db_call(db, "update_service_review") as conn:
        return booking_repo.update_review(conn, bookid, start, comment) > 0


def delete_service_review(db: Database, bookid: int) -> bool:
    with db_call(db, "delete_service_review") as conn:
        return booking_repo.delete_review(conn, bookid) > 0


def get_service_review(db: Database, bookid: int) -> ServiceReview | None:
    with db_call(db, "get_service_review") as conn:
        return one(booking_repo.get_review(conn, bookid), ServiceReview.from_row)


# ===== progress updates (1:many with booking) =====
def add_service_update(db: Database, bookid: int, no_update: int | None, text: str | None, image: bytes | None = None) -> int:
    """Append a progress update; with no_update=None the next sequence number is taken.

    Raises NotFoundError when the booking does not exist.
    """
    with db_call(db, "add_service_update", immediate=True) as conn:
        if not booking_repo.booking_exists(conn, bookid):
            raise NotFoundError(f"booking {bookid} not found")
        if no_update is None:
            no_update = booking_repo.next_update_no(conn, bookid)
        booking_repo.insert_update(conn, bookid, no_update, text, image)
    return no_update


def get_service_updates_by_book_id(db: Database, bookid: int) -> list[ServiceUpdate]:
    with db_call(db, "get_service_updates_by_book_id") as conn:
        return many(booking_repo.list_updates(conn, bookid), ServiceUpdate.from_row)
