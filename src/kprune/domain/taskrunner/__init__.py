"""Run prune passes as tasks reporting through channels."""

from __future__ import annotations

from .context import DEFAULT_EVENT_BUFFER, TaskContext, TaskResult
from .prune_task import PruneTask
from .runner import wait_for_result

__all__ = [
    "DEFAULT_EVENT_BUFFER",
    "PruneTask",
    "TaskContext",
    "TaskResult",
    "wait_for_result",
]
