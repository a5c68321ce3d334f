"""Identity value objects for resources tracked by an inventory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_FIELD_SEPARATOR = "_"


@dataclass(slots=True, frozen=True, order=True)
class GroupKind:
    """API group and kind of a resource, independent of its version."""

    group: str
    kind: str

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass(slots=True, frozen=True)
class ObjectIdentity:
    """Addresses one resource instance by type, namespace and name.

    The string form ``namespace_name_group_kind`` breaks ties when ordering
    identities.
    """

    group_kind: GroupKind
    namespace: str
    name: str

    @classmethod
    def of(cls, *, group: str, kind: str, namespace: str, name: str) -> ObjectIdentity:
        return cls(group_kind=GroupKind(group=group, kind=kind), namespace=namespace, name=name)

    def __str__(self) -> str:
        return _FIELD_SEPARATOR.join(
            (self.namespace, self.name, self.group_kind.group, self.group_kind.kind)
        )


@dataclass(slots=True, frozen=True)
class LiveObject:
    """State of a resource as currently stored in the cluster."""

    identity: ObjectIdentity
    uid: str
    annotations: Mapping[str, str] = field(default_factory=dict[str, str])
    payload: Mapping[str, object] = field(default_factory=dict[str, object], repr=False)
