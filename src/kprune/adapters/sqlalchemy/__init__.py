"""SQLAlchemy adapter package for kprune."""

from __future__ import annotations

from .mappings import inventory_object_table, inventory_table, metadata
from .store import SqlAlchemyInventoryStore
from .unit_of_work import StartupError, configured_engine, is_started, shutdown, startup

__all__ = [
    "SqlAlchemyInventoryStore",
    "StartupError",
    "configured_engine",
    "inventory_object_table",
    "inventory_table",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
