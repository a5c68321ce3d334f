"""Ports for delivering prune progress."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kprune.domain.model import ObjectIdentity, PruneEvent


@runtime_checkable
class EventSink(Protocol):
    """Channel accepting prune events; ``queue.Queue`` satisfies it."""

    def put(self, item: PruneEvent) -> None: ...


type OrderKey = Callable[[ObjectIdentity], Any]
