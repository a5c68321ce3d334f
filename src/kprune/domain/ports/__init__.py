"""Domain port definitions for adapters."""

from __future__ import annotations

from .cluster import ClusterClient, ResourceMapping, ResourceResolver
from .events import EventSink, OrderKey
from .inventory import InventoryStore

__all__ = [
    "ClusterClient",
    "EventSink",
    "InventoryStore",
    "OrderKey",
    "ResourceMapping",
    "ResourceResolver",
]
