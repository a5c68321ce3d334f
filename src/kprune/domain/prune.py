"""Prune previously applied objects that were omitted from the current apply.

Each apply records the identities it touched in an inventory. A prune pass
compares that record with the set just applied, deletes whatever is no longer
wanted and finally overwrites the record with the current set.

The record is replaced only after every deletion succeeded. A pass that fails
half-way leaves the previous record in place, so a rerun still knows about
every object that may remain in the cluster.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from kprune.domain.errors import NotFoundError
from kprune.domain.lifecycle import prevent_delete_annotation
from kprune.domain.model import DryRunStrategy, PruneEvent, split_inventory
from kprune.domain.ordering import apply_order_key, sort_for_prune

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kprune.domain.model import (
        CurrentUIDSet,
        ObjectIdentity,
        PropagationPolicy,
        ResourceInfo,
    )
    from kprune.domain.ports import (
        ClusterClient,
        EventSink,
        InventoryStore,
        OrderKey,
        ResourceResolver,
    )

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PruneOptions:
    """Parameters tuning a single prune pass."""

    dry_run_strategy: DryRunStrategy = DryRunStrategy.NONE
    propagation_policy: PropagationPolicy | None = None
    order: OrderKey = apply_order_key


class Pruner:
    """Deletes objects recorded in an inventory but absent from the current apply.

    ``current_uids`` holds the UIDs of every object created or updated by the
    current apply. It is captured once at construction; the apply that fills it
    must have finished before the pruner is built.
    """

    def __init__(
        self,
        *,
        resolver: ResourceResolver,
        client: ClusterClient,
        inventory_store: InventoryStore,
        current_uids: Iterable[str],
    ) -> None:
        self.resolver = resolver
        self.client = client
        self.inventory_store = inventory_store
        self.current_uids: CurrentUIDSet = frozenset(current_uids)

    def prune(
        self,
        current_objects: Iterable[ResourceInfo],
        events: EventSink,
        options: PruneOptions | None = None,
    ) -> None:
        """Run one prune pass, raising the first error that aborts it."""

        options = options or PruneOptions()
        inventory, local_objects = split_inventory(current_objects)
        log.debug("prune local inventory object: %s", inventory)

        previous = self.inventory_store.load(inventory)
        log.debug("prune %d currently applied objects", len(self.current_uids))
        log.debug("prune %d previously applied objects", len(previous))

        pruned = skipped = 0
        for identity in sort_for_prune(previous, options.order):
            mapping = self.resolver.resolve(identity.group_kind)
            try:
                obj = self.client.get(mapping, identity.namespace, identity.name)
            except NotFoundError:
                log.debug("prune object already absent: %s", identity)
                continue

            log.debug("prune previously applied object UID: %s", obj.uid)
            if obj.uid in self.current_uids:
                log.debug("prune object in current apply; do not prune: %s", obj.uid)
                continue

            if prevent_delete_annotation(obj.annotations):
                log.debug("prune object lifecycle directive; do not prune: %s", obj.uid)
                events.put(PruneEvent.skipped(obj))
                skipped += 1
                continue

            if not options.dry_run_strategy.client_or_server_dry_run():
                log.debug("prune object delete: %s/%s", identity.namespace, identity.name)
                self.client.delete(
                    mapping,
                    identity.namespace,
                    identity.name,
                    propagation_policy=options.propagation_policy,
                )
            events.put(PruneEvent.pruned(obj))
            pruned += 1

        local_identities: list[ObjectIdentity] = [info.identity for info in local_objects]
        self.inventory_store.replace(inventory, local_identities)
        log.info(
            "Prune of inventory %s finished: pruned=%s, skipped=%s, recorded=%s, dry_run=%s",
            inventory,
            pruned,
            skipped,
            len(local_identities),
            options.dry_run_strategy,
        )
