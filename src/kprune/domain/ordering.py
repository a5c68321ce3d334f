"""Apply ordering of resource kinds and its inverse used for pruning.

Apply creates dependencies before dependents (namespaces before the objects
they contain, CRDs before custom resources, ...). Pruning walks the same order
backwards so dependents are removed first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kprune.domain.model import ObjectIdentity
    from kprune.domain.ports import OrderKey

KIND_ORDER_FIRST: Final[tuple[str, ...]] = (
    "Namespace",
    "ResourceQuota",
    "StorageClass",
    "CustomResourceDefinition",
    "MutatingWebhookConfiguration",
    "ServiceAccount",
    "PodSecurityPolicy",
    "Role",
    "ClusterRole",
    "RoleBinding",
    "ClusterRoleBinding",
    "ConfigMap",
    "Secret",
    "Endpoints",
    "Service",
    "LimitRange",
    "PriorityClass",
    "PersistentVolume",
    "PersistentVolumeClaim",
    "Deployment",
    "StatefulSet",
    "CronJob",
    "PodDisruptionBudget",
)
KIND_ORDER_LAST: Final[tuple[str, ...]] = ("ValidatingWebhookConfiguration",)

_FIRST_INDEX: Final[dict[str, int]] = {kind: index for index, kind in enumerate(KIND_ORDER_FIRST)}
_LAST_INDEX: Final[dict[str, int]] = {kind: index for index, kind in enumerate(KIND_ORDER_LAST)}


def apply_order_key(identity: ObjectIdentity) -> tuple[int, int, str, str, str, str]:
    """Rank an identity by the order in which apply creates it.

    Known kinds come first in ``KIND_ORDER_FIRST`` order, unknown kinds follow
    alphabetically, ``KIND_ORDER_LAST`` kinds go at the end. Within one kind
    objects are ordered by namespace and name.
    """

    kind = identity.group_kind.kind
    group = identity.group_kind.group
    if kind in _FIRST_INDEX:
        bucket, index, kind_name = 0, _FIRST_INDEX[kind], ""
    elif kind in _LAST_INDEX:
        bucket, index, kind_name = 2, _LAST_INDEX[kind], ""
    else:
        bucket, index, kind_name = 1, 0, kind
    return bucket, index, kind_name, group, identity.namespace, identity.name


def sort_for_prune(
    identities: Iterable[ObjectIdentity],
    key: OrderKey = apply_order_key,
) -> list[ObjectIdentity]:
    """Return ``identities`` in reverse apply order.

    Identities that ``key`` ranks equally are tie-broken by their string form so
    the result never depends on the input order.
    """

    return sorted(identities, key=lambda identity: (key(identity), str(identity)), reverse=True)
