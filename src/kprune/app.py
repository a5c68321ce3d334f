"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from kprune.adapters.kubernetes import (
    DiscoveryResourceResolver,
    HttpClusterClient,
    StaticResourceResolver,
    build_http_client,
    load_manifest,
)
from kprune.adapters.sqlalchemy import SqlAlchemyInventoryStore, is_started, startup
from kprune.config import get_cluster_config, get_prune_config
from kprune.domain.errors import NotFoundError
from kprune.domain.model import (
    DryRunStrategy,
    PruneEvent,
    PruneEventOperation,
    split_inventory,
)
from kprune.domain.prune import Pruner
from kprune.domain.taskrunner import PruneTask, TaskContext, wait_for_result

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from kprune.domain.model import Inventory, ObjectIdentity, PropagationPolicy, ResourceInfo
    from kprune.domain.ports import ClusterClient, InventoryStore, ResourceResolver

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DryRunInventoryStore:
    """Reads through to ``store`` and drops every write made during a dry run."""

    store: InventoryStore

    def load(self, inventory: Inventory) -> list[ObjectIdentity]:
        return self.store.load(inventory)

    def replace(self, inventory: Inventory, identities: Iterable[ObjectIdentity]) -> None:
        log.info("Dry run: inventory %s left unchanged", inventory)
        log.debug("dry run would record %d objects", len(list(identities)))


@dataclass(slots=True)
class PruneSummary:
    """Outcome of a prune run as reported to the user."""

    dry_run: DryRunStrategy
    events: list[PruneEvent] = field(default_factory=list["PruneEvent"])

    @property
    def pruned(self) -> int:
        return sum(1 for event in self.events if event.operation is PruneEventOperation.PRUNED)

    @property
    def skipped(self) -> int:
        return sum(1 for event in self.events if event.operation is PruneEventOperation.SKIPPED)


def collect_applied_uids(
    objects: Iterable[ResourceInfo],
    *,
    resolver: ResourceResolver,
    client: ClusterClient,
) -> frozenset[str]:
    """Return the live UIDs of the objects an apply just wrote.

    Objects that do not exist are left out: they cannot shadow a pruning
    candidate.
    """

    uids: set[str] = set()
    for info in objects:
        if info.is_inventory:
            continue
        identity = info.identity
        mapping = resolver.resolve(identity.group_kind)
        try:
            live = client.get(mapping, identity.namespace, identity.name)
        except NotFoundError:
            log.debug("applied object not found in cluster: %s", identity)
            continue
        if live.uid:
            uids.add(live.uid)
    return frozenset(uids)


def run_prune(
    objects: list[ResourceInfo],
    *,
    resolver: ResourceResolver,
    client: ClusterClient,
    inventory_store: InventoryStore,
    current_uids: Iterable[str],
    dry_run: DryRunStrategy = DryRunStrategy.NONE,
    propagation_policy: PropagationPolicy | None = None,
    event_buffer: int | None = None,
    on_event: Callable[[PruneEvent], None] | None = None,
) -> PruneSummary:
    """Run one prune task to completion and raise the error it reports, if any."""

    if dry_run.client_or_server_dry_run():
        inventory_store = DryRunInventoryStore(inventory_store)
    pruner = Pruner(
        resolver=resolver,
        client=client,
        inventory_store=inventory_store,
        current_uids=current_uids,
    )
    task = PruneTask(
        pruner=pruner,
        objects=objects,
        dry_run_strategy=dry_run,
        propagation_policy=propagation_policy,
    )
    if event_buffer is None:
        event_buffer = get_prune_config().event_buffer
    context = TaskContext(event_buffer=event_buffer)
    summary = PruneSummary(dry_run=dry_run)

    def record(event: PruneEvent) -> None:
        summary.events.append(event)
        if on_event is not None:
            on_event(event)

    task.start(context)
    result = wait_for_result(context, record)
    if result.error is not None:
        raise result.error
    return summary


def prune_manifest(
    manifest: Path,
    *,
    dry_run: DryRunStrategy = DryRunStrategy.NONE,
    propagation_policy: PropagationPolicy | None = None,
    static_mappings: bool = False,
    on_event: Callable[[PruneEvent], None] | None = None,
) -> PruneSummary:
    """Prune everything recorded for the manifest's inventory but no longer in it."""

    objects = load_manifest(manifest)
    _ensure_storage()
    cluster_config = get_cluster_config()
    log.info(
        "Starting prune: manifest=%s, objects=%s, dry_run=%s, propagation=%s",
        manifest,
        len(objects),
        dry_run,
        propagation_policy,
    )

    http_client = build_http_client(cluster_config)
    with HttpClusterClient(http_client) as client:
        resolver: ResourceResolver = (
            StaticResourceResolver() if static_mappings else DiscoveryResourceResolver(http_client)
        )
        current_uids = collect_applied_uids(objects, resolver=resolver, client=client)
        summary = run_prune(
            objects,
            resolver=resolver,
            client=client,
            inventory_store=SqlAlchemyInventoryStore(),
            current_uids=current_uids,
            dry_run=dry_run,
            propagation_policy=propagation_policy,
            on_event=on_event,
        )

    log.info(
        "Finished prune: pruned=%s, skipped=%s, dry_run=%s",
        summary.pruned,
        summary.skipped,
        summary.dry_run,
    )
    return summary


def recorded_objects(manifest: Path) -> list[ObjectIdentity]:
    """Return the identities currently recorded for the manifest's inventory."""

    inventory, _objects = split_inventory(load_manifest(manifest))
    _ensure_storage()
    return SqlAlchemyInventoryStore().load(inventory)


def _ensure_storage() -> None:
    if not is_started():
        startup()
