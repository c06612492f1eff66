"""Data-access layer for the pet-care management application."""
from __future__ import annotations

from .db import Database, DbSettings, load_settings

__version__ = "0.1.0"

__all__ = ["Database", "DbSettings", "load_settings", "__version__"]
