"""Resource resolvers mapping group/kinds to API endpoints."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from kprune.domain.errors import NotFoundError, NotSupportedError
from kprune.domain.model import GroupKind
from kprune.domain.ports import ResourceMapping

from .client import group_version_path, raise_for_api_status
from .errors import ClusterAPIError
from .schema import APIGroupList, APIResourceList, APIVersions

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from kprune.domain.ports import ResourceResolver

log = getLogger(__name__)


def _builtin(
    group: str, version: str, kind: str, resource: str, *, namespaced: bool = True
) -> tuple[GroupKind, ResourceMapping]:
    return GroupKind(group=group, kind=kind), ResourceMapping(
        group=group, version=version, resource=resource, namespaced=namespaced
    )


BUILTIN_MAPPINGS: Final[dict[GroupKind, ResourceMapping]] = dict(
    (
        _builtin("", "v1", "Namespace", "namespaces", namespaced=False),
        _builtin("", "v1", "ConfigMap", "configmaps"),
        _builtin("", "v1", "Secret", "secrets"),
        _builtin("", "v1", "Service", "services"),
        _builtin("", "v1", "ServiceAccount", "serviceaccounts"),
        _builtin("", "v1", "PersistentVolumeClaim", "persistentvolumeclaims"),
        _builtin("", "v1", "PersistentVolume", "persistentvolumes", namespaced=False),
        _builtin("", "v1", "Pod", "pods"),
        _builtin("", "v1", "ResourceQuota", "resourcequotas"),
        _builtin("", "v1", "LimitRange", "limitranges"),
        _builtin("apps", "v1", "Deployment", "deployments"),
        _builtin("apps", "v1", "StatefulSet", "statefulsets"),
        _builtin("apps", "v1", "DaemonSet", "daemonsets"),
        _builtin("apps", "v1", "ReplicaSet", "replicasets"),
        _builtin("batch", "v1", "Job", "jobs"),
        _builtin("batch", "v1", "CronJob", "cronjobs"),
        _builtin("networking.k8s.io", "v1", "Ingress", "ingresses"),
        _builtin("policy", "v1", "PodDisruptionBudget", "poddisruptionbudgets"),
        _builtin("rbac.authorization.k8s.io", "v1", "Role", "roles"),
        _builtin("rbac.authorization.k8s.io", "v1", "RoleBinding", "rolebindings"),
        _builtin("rbac.authorization.k8s.io", "v1", "ClusterRole", "clusterroles", namespaced=False),
        _builtin(
            "rbac.authorization.k8s.io",
            "v1",
            "ClusterRoleBinding",
            "clusterrolebindings",
            namespaced=False,
        ),
        _builtin(
            "apiextensions.k8s.io",
            "v1",
            "CustomResourceDefinition",
            "customresourcedefinitions",
            namespaced=False,
        ),
    )
)


class StaticResourceResolver:
    """Resolve from a fixed table; used offline and in tests."""

    def __init__(self, mappings: Mapping[GroupKind, ResourceMapping] | None = None) -> None:
        self._mappings = dict(BUILTIN_MAPPINGS if mappings is None else mappings)

    def resolve(self, group_kind: GroupKind) -> ResourceMapping:
        try:
            return self._mappings[group_kind]
        except KeyError:
            raise NotSupportedError(group_kind) from None


class DiscoveryResourceResolver:
    """Resolve through the API server's discovery documents.

    The kind index is built on first use and kept for the lifetime of the
    resolver; call ``invalidate`` after installing new CRDs. Group versions whose
    discovery document cannot be fetched, such as an aggregated API that is
    down, are left out of the index.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client
        self._index: dict[GroupKind, ResourceMapping] | None = None

    def resolve(self, group_kind: GroupKind) -> ResourceMapping:
        mapping = self._load_index().get(group_kind)
        if mapping is None:
            raise NotSupportedError(group_kind)
        return mapping

    def invalidate(self) -> None:
        self._index = None

    def _load_index(self) -> dict[GroupKind, ResourceMapping]:
        if self._index is not None:
            return self._index

        index: dict[GroupKind, ResourceMapping] = {}
        core = APIVersions.model_validate(self._get_json("/api"))
        for version in core.versions:
            self._index_group_version(index, group="", version=version)

        groups = APIGroupList.model_validate(self._get_json("/apis"))
        for group in groups.groups:
            for entry in group.ordered_versions():
                self._index_group_version(index, group=group.name, version=entry.version)

        log.debug("discovered %d resource kinds", len(index))
        self._index = index
        return index

    def _index_group_version(
        self,
        index: dict[GroupKind, ResourceMapping],
        *,
        group: str,
        version: str,
    ) -> None:
        path = group_version_path(group, version)
        try:
            resources = APIResourceList.model_validate(self._get_json(path))
        except (ClusterAPIError, NotFoundError) as exc:
            # kinds of an unavailable group stay unresolvable
            log.warning("Skipping unavailable API group version %s: %s", path, exc)
            return
        for resource in resources.resources:
            if resource.is_subresource:
                continue
            # the first version seen for a kind wins, preferred versions come first
            index.setdefault(
                GroupKind(group=group, kind=resource.kind),
                ResourceMapping(
                    group=group,
                    version=version,
                    resource=resource.name,
                    namespaced=resource.namespaced,
                ),
            )

    def _get_json(self, path: str) -> object:
        response = self._client.get(path)
        raise_for_api_status(response)
        return response.json()


if TYPE_CHECKING:
    _static_check: ResourceResolver = StaticResourceResolver()
