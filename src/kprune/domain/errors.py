"""Errors raised by the prune engine and its collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kprune.domain.model.identity import GroupKind


class PruneError(RuntimeError):
    """Base class for prune failures."""


class MalformedInputError(PruneError):
    """Raised when the current object set lacks exactly one inventory object."""


class NotSupportedError(PruneError):
    """Raised when a resource type cannot be mapped to an API endpoint."""

    def __init__(self, group_kind: GroupKind, message: str | None = None) -> None:
        super().__init__(message or f"No resource mapping for {group_kind}")
        self.group_kind = group_kind


class NotFoundError(PruneError):
    """Raised by cluster clients when the requested object does not exist."""
