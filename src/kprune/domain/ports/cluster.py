"""Ports for resolving and manipulating live cluster objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kprune.domain.model import GroupKind, LiveObject, PropagationPolicy


@dataclass(slots=True, frozen=True)
class ResourceMapping:
    """Addressable API endpoint for one resource type."""

    group: str
    version: str
    resource: str
    namespaced: bool = True

    @property
    def group_version(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


@runtime_checkable
class ResourceResolver(Protocol):
    """Maps a group/kind to an endpoint or raises ``NotSupportedError``."""

    def resolve(self, group_kind: GroupKind) -> ResourceMapping: ...


@runtime_checkable
class ClusterClient(Protocol):
    """Fetch and delete single objects; ``get`` raises ``NotFoundError`` when absent."""

    def get(self, mapping: ResourceMapping, namespace: str, name: str) -> LiveObject: ...

    def delete(
        self,
        mapping: ResourceMapping,
        namespace: str,
        name: str,
        *,
        propagation_policy: PropagationPolicy | None = None,
    ) -> None: ...
