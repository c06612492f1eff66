"""
FastAPI app entry point aggregating per-domain routers under petcare/routes.
Keep as `uvicorn petcare.api:app`.
"""
from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .db import Database, load_settings
from .routes import base as base_routes
from .routes import users as users_routes
from .routes import pets as pets_routes
from .routes import tickets as tickets_routes
from .routes import catalog as catalog_routes
from .routes import bookings as bookings_routes
from .routes import notifications as notifications_routes
from .routes import logs as logs_routes


DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def _cors_origins() -> list[str]:
    # PETCARE_CORS_ORIGINS=逗号分隔
    raw = os.environ.get("PETCARE_CORS_ORIGINS")
    if not raw:
        return DEFAULT_ORIGINS
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(db: Database | None = None) -> FastAPI:
    app = FastAPI(title="petcare-api", version=__version__)
    app.state.db = db or Database(load_settings())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def on_startup():
        app.state.db.ensure_schema()

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.db.close()

    # Include routers (split by business domain)
    app.include_router(base_routes.router)
    app.include_router(users_routes.router)
    app.include_router(pets_routes.router)
    app.include_router(tickets_routes.router)
    app.include_router(catalog_routes.router)
    app.include_router(bookings_routes.router)
    app.include_router(notifications_routes.router)
    app.include_router(logs_routes.router)
    return app


app = create_app()
