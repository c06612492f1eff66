import os
import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture()
def tmp_db_path(tmp_path, monkeypatch):
    path = tmp_path / "petcare_test.db"
    # Point petcare to this temp DB
    monkeypatch.setenv("PETCARE_DB_PATH", str(path))
    return str(path)


@pytest.fixture()
def db(tmp_db_path):
    from petcare.db import Database
    database = Database.from_path(tmp_db_path)
    database.ensure_schema()
    yield database
    database.close()


@pytest.fixture()
def client(db):
    from fastapi.testclient import TestClient
    from petcare.api import create_app
    app = create_app(db)
    with TestClient(app) as c:
        yield c


# ---------- seed helpers ----------

@pytest.fixture()
def owner_id(db):
    from petcare.services import user_svc
    return user_svc.create_user(db, "Alice", "alice@example.com", "secret123", "Female", "pet owner")


@pytest.fixture()
def provider_id(db):
    from petcare.services import user_svc
    return user_svc.create_user(db, "Bob", "bob@example.com", "secret123", "Male", "service provider")


@pytest.fixture()
def manager_id(db):
    from petcare.services import user_svc
    return user_svc.create_user(db, "Carol", "carol@example.com", "secret123", None, "manager")


@pytest.fixture()
def pet_id(db, owner_id):
    from petcare.services import pet_svc
    return pet_svc.add_pet(db, "Mochi", "Shiba", "likes walks", None, 3, None, owner_id)


@pytest.fixture()
def service_id(db, provider_id):
    import datetime as dt
    from petcare.services import service_svc
    typeid = service_svc.add_service_type(db, "Grooming")
    sid = service_svc.add_service(db, "Full groom", 60, "bath and trim", dt.time(1, 30), None, typeid, provider_id)
    service_svc.add_time_slot(db, sid, dt.time(9, 0))
    return sid


@pytest.fixture()
def booking_id(db, owner_id, service_id, pet_id):
    import datetime as dt
    from petcare.services import booking_svc
    bookid = booking_svc.add_booking(db, owner_id, service_id, dt.time(9, 0), dt.date(2024, 5, 1), "card", "pending")
    booking_svc.add_booking_pet(db, bookid, pet_id)
    return bookid
