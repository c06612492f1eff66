from __future__ import annotations

import logging

from ..db import Database
from ..models import Role, User, Manager, PetOwner, ServiceProvider
from ..repository import user_repo
from .utils import db_call, one, many

logger = logging.getLogger(__name__)


def create_user(db: Database, name: str, email: str, password: str, gender: str | None, role: str) -> int:
    """Insert a user and its role subtype row as one atomic unit.

    The role is resolved before any statement runs, so an unknown role
    never touches the database. If the subtype insert fails the user row
    is rolled back with it.
    """
    resolved = Role.resolve(role)
    with db_call(db, "create_user", atomic=True) as conn:
        userid = user_repo.insert_user(conn, name, email, password, gender, resolved.value)
        user_repo.insert_role_row(conn, resolved.value, userid)
    logger.info(f"created user {userid} with role {resolved.value}")
    return userid


def get_user_by_id(db: Database, userid: int) -> User | None:
    with db_call(db, "get_user_by_id") as conn:
        return one(user_repo.get_by_id(conn, userid), User.from_row)


def get_user_by_email(db: Database, email: str) -> User | None:
    with db_call(db, "get_user_by_email") as conn:
        return one(user_repo.get_by_email(conn, email), User.from_row)


def get_all_users(db: Database) -> list[User]:
    with db_call(db, "get_all_users") as conn:
        return many(user_repo.list_all(conn), User.from_row)


def update_user(db: Database, userid: int, name: str, email: str, password: str, gender: str | None, role: str) -> bool:
    # 只校验角色合法；子类型行不随之迁移
    resolved = Role.resolve(role)
    with db_call(db, "update_user") as conn:
        return user_repo.update_user(conn, userid, name, email, password, gender, resolved.value) > 0


def delete_user(db: Database, userid: int) -> bool:
    with db_call(db, "delete_user") as conn:
        return user_repo.delete_user(conn, userid) > 0


# ===== managers =====
def get_manager_by_id(db: Database, id: int) -> Manager | None:
    with db_call(db, "get_manager_by_id") as conn:
        return one(user_repo.get_manager(conn, id), Manager.from_row)


def get_all_managers(db: Database) -> list[Manager]:
    with db_call(db, "get_all_managers") as conn:
        return many(user_repo.list_managers(conn), Manager.from_row)


# ===== pet owners =====
def update_pet_owner(db: Database, id: int, phone: str | None, city: str | None, address: str | None) -> bool:
    with db_call(db, "update_pet_owner") as conn:
        return user_repo.update_pet_owner(conn, id, phone, city, address) > 0


def get_pet_owner_by_id(db: Database, id: int) -> PetOwner | None:
    with db_call(db, "get_pet_owner_by_id") as conn:
        return one(user_repo.get_pet_owner(conn, id), PetOwner.from_row)


def get_all_pet_owners(db: Database) -> list[PetOwner]:
    with db_call(db, "get_all_pet_owners") as conn:
        return many(user_repo.list_pet_owners(conn), PetOwner.from_row)


# ===== service providers =====
def update_service_provider(
    db: Database,
    id: int,
    business_name: str | None,
    logo: bytes | None,
    phone: str | None,
    description: str | None,
    address: str | None,
    website: str | None,
) -> bool:
    with db_call(db, "update_service_provider") as conn:
        n = user_repo.update_service_provider(conn, id, business_name, logo, phone, description, address, website)
        return n > 0


def get_service_provider_by_id(db: Database, id: int) -> ServiceProvider | None:
    with db_call(db, "get_service_provider_by_id") as conn:
        return one(user_repo.get_service_provider(conn, id), ServiceProvider.from_row)


def get_all_service_providers(db: Database) -> list[ServiceProvider]:
    with db_call(db, "get_all_service_providers") as conn:
        return many(user_repo.list_service_providers(conn), ServiceProvider.from_row)
