from __future__ import annotations

from ..db import Database
from ..models import Notification
from ..repository import notification_repo
from .utils import db_call, many


def add_notification(db: Database, userid: int, text: str | None) -> int:
    with db_call(db, "add_notification") as conn:
        return notification_repo.insert_notification(conn, userid, text)


def get_notifications_by_user_id(db: Database, userid: int) -> list[Notification]:
    with db_call(db, "get_notifications_by_user_id") as conn:
        return many(notification_repo.list_by_user(conn, userid), Notification.from_row)


def update_notification(db: Database, notiid: int, text: str | None) -> bool:
    with db_call(db, "update_notification") as conn:
        return notification_repo.update_text(conn, notiid, text) > 0


def delete_notification(db: Database, notiid: int) -> bool:
    with db_call(db, "delete_notification") as conn:
        return notification_repo.delete_notification(conn, notiid) > 0


def delete_notifications_by_user_id(db: Database, userid: int) -> bool:
    with db_call(db, "delete_notifications_by_user_id") as conn:
        return notification_repo.delete_by_user(conn, userid) > 0
