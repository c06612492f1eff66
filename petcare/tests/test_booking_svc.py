"""
预约 / 报告 / 评价 / 进度更新测试
"""

import datetime as dt

import pytest

from petcare.errors import ValidationError, ConstraintError, NotFoundError
from petcare.services import booking_svc, pet_svc, user_svc


class TestBookings:

    def test_booking_fields(self, db, owner_id, service_id, booking_id, pet_id):
        b = booking_svc.get_booking_by_id(db, booking_id)
        assert b.poid == owner_id and b.svid == service_id
        assert b.slot == dt.time(9, 0)
        assert b.serve_date == dt.date(2024, 5, 1)
        assert b.payment_method == "card"
        assert b.book_timestamp is not None
        assert b.pet_ids == [pet_id]

    def test_slot_must_exist_for_service(self, db, owner_id, service_id):
        with pytest.raises(ConstraintError):
            booking_svc.add_booking(db, owner_id, service_id, dt.time(23, 0), None, None, None)

    def test_parent_scoped_reads(self, db, owner_id, service_id, booking_id):
        assert [b.bookid for b in booking_svc.get_bookings_by_pet_owner(db, owner_id)] == [booking_id]
        assert [b.bookid for b in booking_svc.get_bookings_by_service_id(db, service_id)] == [booking_id]
        assert booking_svc.get_bookings_by_pet_owner(db, 999) == []

    def test_status_and_delete(self, db, booking_id):
        assert booking_svc.update_booking_status(db, booking_id, "confirmed")
        assert booking_svc.get_booking_by_id(db, booking_id).status == "confirmed"
        assert booking_svc.update_booking_status(db, 999, "confirmed") is False
        assert booking_svc.delete_booking(db, booking_id) is True
        assert booking_svc.get_booking_by_id(db, booking_id) is None
        assert booking_svc.delete_booking(db, booking_id) is False

    def test_booking_pets(self, db, owner_id, booking_id, pet_id):
        other = pet_svc.add_pet(db, "Tofu", "Corgi", None, None, None, None, owner_id)
        assert booking_svc.add_booking_pet(db, booking_id, other)
        assert booking_svc.get_pet_ids_by_booking_id(db, booking_id) == sorted([pet_id, other])
        with pytest.raises(ConstraintError):
            booking_svc.add_booking_pet(db, booking_id, other)
        assert booking_svc.remove_booking_pet(db, booking_id, other) is True
        assert booking_svc.remove_booking_pet(db, booking_id, other) is False

    def test_booked_pet_cannot_be_deleted(self, db, booking_id, pet_id):
        with pytest.raises(ConstraintError):
            pet_svc.delete_pet(db, pet_id)


class TestCreateBooking:

    SLOT = dt.time(9, 0)
    DAY = dt.date(2024, 5, 1)

    def test_pets_attached_with_booking(self, db, owner_id, service_id, pet_id):
        other = pet_svc.add_pet(db, "Tofu", "Corgi", None, None, None, None, owner_id)
        bookid = booking_svc.create_booking(db, owner_id, service_id, self.SLOT, self.DAY, "card", "pending", [other, pet_id, other])
        assert booking_svc.get_booking_by_id(db, bookid).pet_ids == sorted([pet_id, other])

    def test_unknown_pet_leaves_no_booking(self, db, owner_id, service_id, pet_id):
        with pytest.raises(ValidationError):
            booking_svc.create_booking(db, owner_id, service_id, self.SLOT, self.DAY, None, None, [pet_id, 999])
        assert booking_svc.get_bookings_by_pet_owner(db, owner_id) == []

    def test_other_owners_pet_rejected(self, db, owner_id, service_id):
        dave = user_svc.create_user(db, "Dave", "dave@example.com", "secret123", None, "pet owner")
        his_pet = pet_svc.add_pet(db, "Rex", "Husky", None, None, None, None, dave)
        with pytest.raises(ValidationError):
            booking_svc.create_booking(db, owner_id, service_id, self.SLOT, self.DAY, None, None, [his_pet])
        assert booking_svc.get_bookings_by_service_id(db, service_id) == []

    def test_slot_taken_on_same_date(self, db, owner_id, service_id, booking_id):
        with pytest.raises(ConstraintError):
            booking_svc.add_booking(db, owner_id, service_id, self.SLOT, self.DAY, None, None)
        assert [b.bookid for b in booking_svc.get_bookings_by_service_id(db, service_id)] == [booking_id]

    def test_slot_free_on_other_date(self, db, owner_id, service_id, booking_id):
        assert booking_svc.add_booking(db, owner_id, service_id, self.SLOT, dt.date(2024, 5, 2), None, None)

    def test_cancelled_booking_frees_slot(self, db, owner_id, service_id, booking_id, pet_id):
        booking_svc.update_booking_status(db, booking_id, "cancelled")
        bookid = booking_svc.create_booking(db, owner_id, service_id, self.SLOT, self.DAY, None, "pending", [pet_id])
        assert bookid != booking_id
        # 新预约未取消，时段再次被占
        with pytest.raises(ConstraintError):
            booking_svc.add_booking(db, owner_id, service_id, self.SLOT, self.DAY, None, None)


class TestReportReview:

    def test_report(self, db, booking_id):
        assert booking_svc.get_service_report(db, booking_id) is None
        assert booking_svc.add_service_report(db, booking_id, "all good", b"jpeg")
        assert booking_svc.get_service_report(db, booking_id).image == b"jpeg"
        with pytest.raises(ConstraintError):
            booking_svc.add_service_report(db, booking_id, "again")
        assert booking_svc.update_service_report(db, booking_id, "updated", None)
        assert booking_svc.get_service_report(db, booking_id).text == "updated"
        assert booking_svc.delete_service_report(db, booking_id) is True
        assert booking_svc.update_service_report(db, booking_id, "x", None) is False

    def test_review(self, db, booking_id):
        assert booking_svc.add_service_review(db, booking_id, 5, "great")
        assert booking_svc.get_service_review(db, booking_id).start == 5
        assert booking_svc.update_service_review(db, booking_id, 4, "good")
        assert booking_svc.get_service_review(db, booking_id).comment == "good"
        assert booking_svc.delete_service_review(db, booking_id) is True
        assert booking_svc.get_service_review(db, booking_id) is None

    @pytest.mark.parametrize("rating", [0, 6, True, "5", 4.5])
    def test_review_rating_range(self, db, booking_id, rating):
        with pytest.raises(ValidationError):
            booking_svc.add_service_review(db, booking_id, rating, None)

    def test_report_for_missing_booking(self, db):
        with pytest.raises(ConstraintError):
            booking_svc.add_service_report(db, 999, "x")


class TestServiceUpdates:

    def test_ordered_by_number_with_interleaving(self, db, owner_id, service_id, booking_id):
        other = booking_svc.add_booking(db, owner_id, service_id, dt.time(9, 0), dt.date(2024, 5, 2), None, None)
        booking_svc.add_service_update(db, booking_id, 3, "third")
        booking_svc.add_service_update(db, other, 1, "other booking")
        booking_svc.add_service_update(db, booking_id, 1, "first")
        booking_svc.add_service_update(db, booking_id, 2, "second")
        ups = booking_svc.get_service_updates_by_book_id(db, booking_id)
        assert [u.no_update for u in ups] == [1, 2, 3]
        assert [u.text for u in ups] == ["first", "second", "third"]
        assert [u.text for u in booking_svc.get_service_updates_by_book_id(db, other)] == ["other booking"]

    def test_auto_numbering(self, db, booking_id):
        assert booking_svc.add_service_update(db, booking_id, None, "arrived") == 1
        assert booking_svc.add_service_update(db, booking_id, None, "walking", b"img") == 2
        assert booking_svc.get_service_updates_by_book_id(db, booking_id)[1].image == b"img"

    def test_update_for_missing_booking(self, db):
        with pytest.raises(NotFoundError):
            booking_svc.add_service_update(db, 999, None, "x")
        assert booking_svc.get_service_updates_by_book_id(db, 999) == []

    def test_duplicate_number(self, db, booking_id):
        booking_svc.add_service_update(db, booking_id, 1, "a")
        with pytest.raises(ConstraintError):
            booking_svc.add_service_update(db, booking_id, 1, "b")

    def test_deleting_booking_cascades(self, db, booking_id):
        booking_svc.add_service_update(db, booking_id, None, "a")
        booking_svc.add_service_review(db, booking_id, 3, None)
        booking_svc.delete_booking(db, booking_id)
        assert booking_svc.get_service_updates_by_book_id(db, booking_id) == []
        assert booking_svc.get_service_review(db, booking_id) is None
