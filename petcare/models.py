"""Plain records for every table, each with a single row mapping."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from sqlite3 import Row
from typing import Optional

from .errors import ValidationError, IllegalTransitionError


class Role(str, Enum):
    MANAGER = "manager"
    PET_OWNER = "pet owner"
    SERVICE_PROVIDER = "service provider"

    @classmethod
    def resolve(cls, raw) -> "Role":
        if isinstance(raw, Role):
            return raw
        key = (raw or "").strip().lower() if isinstance(raw, str) else ""
        for r in cls:
            if r.value == key:
                return r
        raise ValidationError(f"unknown role: {raw!r}")


class TicketStatus(str, Enum):
    PENDING = "pending"
    SOLVING = "solving"
    RESOLVED = "resolved"

    @classmethod
    def resolve(cls, raw) -> "TicketStatus":
        if isinstance(raw, TicketStatus):
            return raw
        try:
            return cls((raw or "").strip().lower())
        except (ValueError, AttributeError):
            raise ValidationError(f"unknown ticket status: {raw!r}")

    def can_move_to(self, target: "TicketStatus") -> bool:
        return target in TICKET_TRANSITIONS[self]

    def check_move_to(self, target: "TicketStatus") -> None:
        if not self.can_move_to(target):
            raise IllegalTransitionError(self.value, target.value)


TICKET_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    TicketStatus.PENDING: frozenset({TicketStatus.SOLVING}),
    TicketStatus.SOLVING: frozenset({TicketStatus.SOLVING, TicketStatus.RESOLVED}),
    TicketStatus.RESOLVED: frozenset(),
}


class TargetKind(str, Enum):
    DIET = "diet"
    ACTIVITY = "activity"


@dataclass(frozen=True)
class ScheduleTarget:
    """What a pet schedule fires for: one diet or one activity, never both."""

    kind: TargetKind
    target_id: int

    @classmethod
    def diet(cls, dietid: int) -> "ScheduleTarget":
        return cls(TargetKind.DIET, int(dietid))

    @classmethod
    def activity(cls, activityid: int) -> "ScheduleTarget":
        return cls(TargetKind.ACTIVITY, int(activityid))

    @classmethod
    def from_columns(cls, dietid: Optional[int], activityid: Optional[int]) -> "ScheduleTarget":
        if (dietid is None) == (activityid is None):
            raise ValidationError("pet schedule needs exactly one of dietid/activityid")
        if dietid is not None:
            return cls.diet(dietid)
        return cls.activity(activityid)

    def to_columns(self) -> tuple[Optional[int], Optional[int]]:
        if self.kind is TargetKind.DIET:
            return self.target_id, None
        return None, self.target_id


@dataclass
class User:
    userid: int
    name: str
    email: str
    password: str
    gender: Optional[str]
    role: str

    @classmethod
    def from_row(cls, r: Row) -> "User":
        return cls(r["userid"], r["name"], r["email"], r["password"], r["gender"], r["role"])


@dataclass
class Manager:
    id: int

    @classmethod
    def from_row(cls, r: Row) -> "Manager":
        return cls(r["id"])


@dataclass
class PetOwner:
    id: int
    phone: Optional[str]
    city: Optional[str]
    address: Optional[str]

    @classmethod
    def from_row(cls, r: Row) -> "PetOwner":
        return cls(r["id"], r["phone"], r["city"], r["address"])


@dataclass
class ServiceProvider:
    id: int
    business_name: Optional[str]
    logo: Optional[bytes]
    phone: Optional[str]
    description: Optional[str]
    address: Optional[str]
    website: Optional[str]

    @classmethod
    def from_row(cls, r: Row) -> "ServiceProvider":
        return cls(
            r["id"], r["bussiness_name"], r["logo"], r["phone"],
            r["description"], r["address"], r["website"],
        )


@dataclass
class Ticket:
    ticketid: int
    subject: Optional[str]
    description: Optional[str]
    attachment: Optional[bytes]
    response: Optional[str]
    status: TicketStatus
    userid: int
    createtime: Optional[dt.datetime]
    managerid: Optional[int] = None
    assigntime: Optional[dt.datetime] = None

    @classmethod
    def from_row(cls, r: Row) -> "Ticket":
        return cls(
            r["ticketid"], r["subject"], r["description"], r["attachment"], r["respone"],
            TicketStatus(r["status"]), r["userid"], r["createtime"], r["managerid"], r["assigntime"],
        )


@dataclass
class Pet:
    petid: int
    name: str
    breed: str
    description: Optional[str]
    picture: Optional[bytes]
    age: Optional[int]
    dob: Optional[dt.date]
    userid: int

    @classmethod
    def from_row(cls, r: Row) -> "Pet":
        return cls(
            r["petid"], r["name"], r["breed"], r["description"],
            r["picture"], r["age"], r["dob"], r["userid"],
        )


@dataclass
class Diet:
    dietid: int
    name: str
    amount: Optional[str]
    description: Optional[str]
    petid: int

    @classmethod
    def from_row(cls, r: Row) -> "Diet":
        return cls(r["dietid"], r["name"], r["amount"], r["description"], r["petid"])


@dataclass
class Activity:
    activityid: int
    name: str
    description: Optional[str]
    petid: int

    @classmethod
    def from_row(cls, r: Row) -> "Activity":
        return cls(r["activityid"], r["name"], r["description"], r["petid"])


@dataclass
class PetSchedule:
    petscheduleid: int
    startdate: Optional[dt.date]
    repeat_option: str
    hour: int
    minute: int
    target: ScheduleTarget

    @property
    def dietid(self) -> Optional[int]:
        return self.target.to_columns()[0]

    @property
    def activityid(self) -> Optional[int]:
        return self.target.to_columns()[1]

    @classmethod
    def from_row(cls, r: Row) -> "PetSchedule":
        return cls(
            r["petscheduleid"], r["startdate"], r["repeat_option"], r["hour"], r["minute"],
            ScheduleTarget.from_columns(r["dietid"], r["activityid"]),
        )


@dataclass
class ServiceType:
    typeid: int
    type: str

    @classmethod
    def from_row(cls, r: Row) -> "ServiceType":
        return cls(r["typeid"], r["type"])


@dataclass
class Service:
    serviceid: int
    name: str
    price: Optional[int]
    description: Optional[str]
    duration: Optional[dt.time]
    license: Optional[bytes]
    typeid: Optional[int]
    providerid: int

    @classmethod
    def from_row(cls, r: Row) -> "Service":
        return cls(
            r["serviceid"], r["name"], r["price"], r["description"],
            r["duration"], r["license"], r["typeid"], r["providerid"],
        )


@dataclass
class TimeSlot:
    serviceid: int
    slot: dt.time

    @classmethod
    def from_row(cls, r: Row) -> "TimeSlot":
        return cls(r["serviceid"], r["slot"])


@dataclass
class Booking:
    bookid: int
    poid: int
    svid: int
    slot: dt.time
    book_timestamp: Optional[dt.datetime]
    serve_date: Optional[dt.date]
    payment_method: Optional[str]
    status: Optional[str]
    pet_ids: list[int] = field(default_factory=list)

    @classmethod
    def from_row(cls, r: Row) -> "Booking":
        return cls(
            r["bookid"], r["poid"], r["svid"], r["slot"], r["book_timestamp"],
            r["servedate"], r["payment_method"], r["status"],
        )


@dataclass
class ServiceReport:
    bookid: int
    text: Optional[str]
    image: Optional[bytes]

    @classmethod
    def from_row(cls, r: Row) -> "ServiceReport":
        return cls(r["bookid"], r["text"], r["image"])


@dataclass
class ServiceReview:
    bookid: int
    start: int
    comment: Optional[str]

    @classmethod
    def from_row(cls, r: Row) -> "ServiceReview":
        return cls(r["bookid"], r["start"], r["comment"])


@dataclass
class ServiceUpdate:
    bookid: int
    no_update: int
    text: Optional[str]
    image: Optional[bytes]

    @classmethod
    def from_row(cls, r: Row) -> "ServiceUpdate":
        return cls(r["bookid"], r["no_update"], r["text"], r["image"])


@dataclass
class Notification:
    notiid: int
    text: Optional[str]
    userid: int

    @classmethod
    def from_row(cls, r: Row) -> "Notification":
        return cls(r["notiid"], r["text"], r["userid"])


@dataclass
class Schedule:
    scheduleid: int
    scheduled_time: Optional[dt.datetime]
    tittle: Optional[str]
    detail: Optional[str]
    userid: int

    @classmethod
    def from_row(cls, r: Row) -> "Schedule":
        return cls(r["scheduleid"], r["scheduled_time"], r["tittle"], r["detail"], r["userid"])
