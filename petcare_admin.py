#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pet Care admin tool (SQLite)

Commands:
  init                Create the schema in the configured database
  check               Verify the database is reachable
  create-manager      Create a manager account (user row + manager row)
  list-managers       Print every manager with name and e-mail
  export              Dump one table to CSV (blob columns are dropped)

Notes:
- The database location comes from PETCARE_DB_PATH or config.yaml (see petcare.db.load_settings).
- Passwords are stored as given; hashing belongs to the auth layer in front of this tool.
"""

import argparse
import logging
import os
import sys

import pandas as pd

from petcare.db import Database, load_settings
from petcare.errors import PetCareError
from petcare.services import user_svc

logger = logging.getLogger("petcare_admin")

EXPORTABLE = (
    "user", "manager", "petowner", "serviceprovider", "ticket", "pet", "diet", "activity",
    "petschedule", "servicetype", "service", "timeslot", "booking", "booking_pet",
    "service_report", "service_review", "service_update", "notification", "schedule",
    "operation_log",
)


def _db(args) -> Database:
    return Database(load_settings(args.config))


# ---------------- Commands ----------------

def cmd_init(args):
    db = _db(args)
    db.ensure_schema()
    print("Schema ready at", db.settings.db_path)
    return 0


def cmd_check(args):
    db = _db(args)
    if db.ping():
        print("Connected to database!", db.settings.db_path)
        return 0
    print("Database unreachable:", db.settings.db_path)
    return 1


def cmd_create_manager(args):
    if len(args.password) < 8:
        print("Password must be at least 8 characters")
        return 1
    db = _db(args)
    if user_svc.get_user_by_email(db, args.email) is not None:
        print("User with this email already exists")
        return 1
    userid = user_svc.create_user(db, args.name, args.email, args.password, args.gender, "manager")
    print(f"Manager account created: id={userid} email={args.email}")
    return 0


def cmd_list_managers(args):
    db = _db(args)
    managers = user_svc.get_all_managers(db)
    if not managers:
        print("(none)")
        return 0
    for m in managers:
        u = user_svc.get_user_by_id(db, m.id)
        name, email = (u.name, u.email) if u else ("?", "?")
        print(f"{m.id}\t{name}\t{email}")
    return 0


def cmd_export(args):
    if args.table not in EXPORTABLE:
        print("Unknown table:", args.table)
        return 1
    db = _db(args)
    with db.connect() as conn:
        df = pd.read_sql_query(f"SELECT * FROM {args.table}", conn)
    blob_cols = [c for c in df.columns if df[c].map(lambda v: isinstance(v, (bytes, bytearray))).any()]
    df = df.drop(columns=blob_cols)
    out = args.out or os.path.join("exports", f"{args.table}.csv")
    os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
    df.to_csv(out, index=False, encoding="utf-8-sig")
    print(f"{len(df)} rows exported to {out}")
    return 0


# ---------------- Entry ----------------

def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description="Pet care admin tool (SQLite)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create schema")
    p_init.set_defaults(func=cmd_init)

    p_check = sub.add_parser("check", help="check database connectivity")
    p_check.set_defaults(func=cmd_check)

    p_mgr = sub.add_parser("create-manager", help="create a manager account")
    p_mgr.add_argument("--name", required=True)
    p_mgr.add_argument("--email", required=True)
    p_mgr.add_argument("--password", required=True)
    p_mgr.add_argument("--gender", default="Other", choices=["Male", "Female", "Other"])
    p_mgr.set_defaults(func=cmd_create_manager)

    p_list = sub.add_parser("list-managers", help="list manager accounts")
    p_list.set_defaults(func=cmd_list_managers)

    p_exp = sub.add_parser("export", help="export one table to CSV")
    p_exp.add_argument("table")
    p_exp.add_argument("--out", required=False, help="CSV path (default ./exports/<table>.csv)")
    p_exp.set_defaults(func=cmd_export)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except PetCareError as e:
        logger.error(f"{args.func.__name__} failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
