"""Prune pass packaged as a task for the task runner."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from kprune.domain.model import DryRunStrategy
from kprune.domain.ordering import apply_order_key
from kprune.domain.prune import PruneOptions

from .context import TaskResult

if TYPE_CHECKING:
    from kprune.domain.model import PropagationPolicy, ResourceInfo
    from kprune.domain.ports import OrderKey
    from kprune.domain.prune import Pruner

    from .context import TaskContext

log = getLogger(__name__)


@dataclass(slots=True)
class PruneTask:
    """Prunes objects omitted from ``objects``, the set that was just applied."""

    pruner: Pruner
    objects: list[ResourceInfo]
    dry_run_strategy: DryRunStrategy = DryRunStrategy.NONE
    propagation_policy: PropagationPolicy | None = None
    order: OrderKey = apply_order_key
    _thread: threading.Thread | None = field(default=None, init=False, repr=False)

    def start(self, context: TaskContext) -> None:
        """Run the prune pass on a background thread.

        Events go to ``context.events`` as they are produced; exactly one
        ``TaskResult`` is pushed to ``context.results`` when the pass ends.
        """

        if self._thread is not None:
            raise RuntimeError("Prune task already started")
        self._thread = threading.Thread(
            target=self._run,
            args=(context,),
            name="prune-task",
            daemon=True,
        )
        self._thread.start()

    def clear_timeout(self) -> None:
        """A running prune pass cannot be interrupted; nothing to clear."""

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self, context: TaskContext) -> None:
        options = PruneOptions(
            dry_run_strategy=self.dry_run_strategy,
            propagation_policy=self.propagation_policy,
            order=self.order,
        )
        error: BaseException | None = None
        try:
            self.pruner.prune(self.objects, context.events, options)
        except BaseException as exc:  # noqa: BLE001
            log.debug("prune task failed: %r", exc)
            error = exc
        finally:
            context.results.put(TaskResult(error=error))
