"""Port for durable inventory records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kprune.domain.model import Inventory, ObjectIdentity


@runtime_checkable
class InventoryStore(Protocol):
    """Loads and wholesale replaces the identities recorded for an inventory."""

    def load(self, inventory: Inventory) -> list[ObjectIdentity]: ...

    def replace(self, inventory: Inventory, identities: Iterable[ObjectIdentity]) -> None: ...
