import datetime as dt

import pytest

from petcare.errors import ConstraintError
from petcare.services import notification_svc, schedule_svc


class TestNotifications:

    def test_crud(self, db, owner_id):
        nid = notification_svc.add_notification(db, owner_id, "Your booking is confirmed")
        assert [n.text for n in notification_svc.get_notifications_by_user_id(db, owner_id)] == ["Your booking is confirmed"]
        assert notification_svc.update_notification(db, nid, "Booking moved")
        assert notification_svc.get_notifications_by_user_id(db, owner_id)[0].text == "Booking moved"
        assert notification_svc.delete_notification(db, nid) is True
        assert notification_svc.delete_notification(db, nid) is False
        assert notification_svc.update_notification(db, nid, "x") is False

    def test_clear_for_user(self, db, owner_id, provider_id):
        notification_svc.add_notification(db, owner_id, "a")
        notification_svc.add_notification(db, owner_id, "b")
        notification_svc.add_notification(db, provider_id, "c")
        assert notification_svc.delete_notifications_by_user_id(db, owner_id) is True
        assert notification_svc.get_notifications_by_user_id(db, owner_id) == []
        assert len(notification_svc.get_notifications_by_user_id(db, provider_id)) == 1
        assert notification_svc.delete_notifications_by_user_id(db, owner_id) is False

    def test_unknown_user(self, db):
        with pytest.raises(ConstraintError):
            notification_svc.add_notification(db, 999, "x")


class TestSchedules:

    def test_crud(self, db, owner_id):
        when = dt.datetime(2024, 6, 1, 9, 30)
        sid = schedule_svc.add_schedule(db, when, "Vet visit", "annual shots", owner_id)
        s = schedule_svc.get_schedule_by_id(db, sid)
        assert s.scheduled_time == when
        assert s.tittle == "Vet visit"
        assert schedule_svc.update_schedule(db, sid, when + dt.timedelta(days=1), "Vet visit", None, owner_id)
        assert schedule_svc.get_schedule_by_id(db, sid).scheduled_time == dt.datetime(2024, 6, 2, 9, 30)
        assert [x.scheduleid for x in schedule_svc.get_schedules_by_user_id(db, owner_id)] == [sid]
        assert schedule_svc.delete_schedule(db, sid) is True
        assert schedule_svc.get_schedule_by_id(db, sid) is None

    def test_missing(self, db, owner_id):
        assert schedule_svc.get_schedule_by_id(db, 999) is None
        assert schedule_svc.update_schedule(db, 999, None, None, None, owner_id) is False
        assert schedule_svc.delete_schedule(db, 999) is False
        assert schedule_svc.get_schedules_by_user_id(db, 999) == []
