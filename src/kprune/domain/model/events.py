"""Progress events emitted while pruning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import PruneEventOperation

if TYPE_CHECKING:
    from .identity import LiveObject, ObjectIdentity


@dataclass(slots=True, frozen=True)
class PruneEvent:
    """Outcome for one previously applied object that still existed."""

    operation: PruneEventOperation
    object: LiveObject

    @property
    def identity(self) -> ObjectIdentity:
        return self.object.identity

    @classmethod
    def pruned(cls, obj: LiveObject) -> PruneEvent:
        return cls(operation=PruneEventOperation.PRUNED, object=obj)

    @classmethod
    def skipped(cls, obj: LiveObject) -> PruneEvent:
        return cls(operation=PruneEventOperation.SKIPPED, object=obj)
