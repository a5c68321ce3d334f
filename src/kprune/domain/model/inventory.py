"""Inventory descriptors and the split between inventory and applied objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from kprune.domain.errors import MalformedInputError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .identity import ObjectIdentity

INVENTORY_LABEL: Final[str] = "cli-utils.sigs.k8s.io/inventory-id"


@dataclass(slots=True, frozen=True)
class ResourceInfo:
    """Descriptor of one object that is part of the current apply set."""

    identity: ObjectIdentity
    labels: Mapping[str, str] = field(default_factory=dict[str, str])

    @property
    def is_inventory(self) -> bool:
        return INVENTORY_LABEL in self.labels


@dataclass(slots=True, frozen=True)
class Inventory:
    """Key under which the previously applied identities are recorded."""

    namespace: str
    name: str
    inventory_id: str

    @classmethod
    def from_info(cls, info: ResourceInfo) -> Inventory:
        inventory_id = info.labels.get(INVENTORY_LABEL, "").strip()
        if not inventory_id:
            raise MalformedInputError(
                f"Inventory object {info.identity} has an empty {INVENTORY_LABEL} label"
            )
        return cls(
            namespace=info.identity.namespace,
            name=info.identity.name,
            inventory_id=inventory_id,
        )

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name} ({self.inventory_id})"


def split_inventory(infos: Iterable[ResourceInfo]) -> tuple[Inventory, list[ResourceInfo]]:
    """Return the single inventory descriptor and the remaining applied objects."""

    inventories: list[ResourceInfo] = []
    objects: list[ResourceInfo] = []
    for info in infos:
        if info.is_inventory:
            inventories.append(info)
        else:
            objects.append(info)

    if not inventories:
        raise MalformedInputError("Current object set does not contain an inventory object")
    if len(inventories) > 1:
        found = ", ".join(str(info.identity) for info in inventories)
        raise MalformedInputError(f"Current object set contains multiple inventory objects: {found}")

    return Inventory.from_info(inventories[0]), objects
