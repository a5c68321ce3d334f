"""Consumer side of the task channels."""

from __future__ import annotations

import queue
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

    from kprune.domain.model import PruneEvent

    from .context import TaskContext, TaskResult

_POLL_INTERVAL_SECONDS: Final[float] = 0.05


def wait_for_result(
    context: TaskContext,
    on_event: Callable[[PruneEvent], None] | None = None,
) -> TaskResult:
    """Drain ``context.events`` until the task posts its result.

    Events still buffered when the result arrives are delivered before
    returning, so ``on_event`` sees every event in emission order.

    If ``on_event`` raises, later events are discarded but still drained so the
    task can finish; the callback's error is raised once the result is in.
    """

    callback_errors: list[Exception] = []

    def deliver(event: PruneEvent) -> None:
        if on_event is None or callback_errors:
            return
        try:
            on_event(event)
        except Exception as exc:  # noqa: BLE001
            callback_errors.append(exc)

    while True:
        try:
            result = context.results.get(timeout=_POLL_INTERVAL_SECONDS)
        except queue.Empty:
            _drain_events(context, deliver)
            continue
        _drain_events(context, deliver)
        if callback_errors:
            raise callback_errors[0]
        return result


def _drain_events(context: TaskContext, deliver: Callable[[PruneEvent], None]) -> None:
    while True:
        try:
            event = context.events.get_nowait()
        except queue.Empty:
            return
        deliver(event)
