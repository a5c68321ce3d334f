"""Channels shared between a task and the scheduler that started it."""

from __future__ import annotations

import queue
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from kprune.domain.model import PruneEvent

DEFAULT_EVENT_BUFFER: Final[int] = 128


@dataclass(slots=True, frozen=True)
class TaskResult:
    """Terminal outcome of a task; ``error`` is None on success."""

    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class TaskContext:
    """Event and result channels consumed by the scheduler.

    ``events`` is bounded by ``event_buffer``: a producer blocks once the buffer
    is full until the consumer catches up, so the consumer must keep reading
    while a task is running. ``results`` is unbounded and receives one
    ``TaskResult`` per task.
    """

    event_buffer: int = DEFAULT_EVENT_BUFFER
    events: queue.Queue[PruneEvent] = field(init=False)
    results: queue.Queue[TaskResult] = field(init=False)

    def __post_init__(self) -> None:
        if self.event_buffer < 1:
            raise ValueError("Event buffer must hold at least one event")
        self.events = queue.Queue(maxsize=self.event_buffer)
        self.results = queue.Queue()
