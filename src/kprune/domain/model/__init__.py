"""Inventory and identity model shared by the prune engine and adapters."""

from __future__ import annotations

from .enums import DryRunStrategy, PropagationPolicy, PruneEventOperation
from .events import PruneEvent
from .identity import GroupKind, LiveObject, ObjectIdentity
from .inventory import INVENTORY_LABEL, Inventory, ResourceInfo, split_inventory

type CurrentUIDSet = frozenset[str]

__all__ = [
    "INVENTORY_LABEL",
    "CurrentUIDSet",
    "DryRunStrategy",
    "GroupKind",
    "Inventory",
    "LiveObject",
    "ObjectIdentity",
    "PropagationPolicy",
    "PruneEvent",
    "PruneEventOperation",
    "ResourceInfo",
    "split_inventory",
]
