from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from kprune.adapters.kubernetes import ClusterAPIError, HttpClusterClient
from kprune.adapters.kubernetes.client import resource_path
from kprune.domain.errors import NotFoundError
from kprune.domain.model import PropagationPolicy
from kprune.domain.ports import ResourceMapping
from tests.helpers.cluster import make_identity

if TYPE_CHECKING:
    from collections.abc import Callable

DEPLOYMENTS = ResourceMapping(group="apps", version="v1", resource="deployments")
NAMESPACES = ResourceMapping(group="", version="v1", resource="namespaces", namespaced=False)
CONFIGMAPS = ResourceMapping(group="", version="v1", resource="configmaps")


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> HttpClusterClient:
    return HttpClusterClient(
        httpx.Client(base_url="https://cluster.test", transport=httpx.MockTransport(handler))
    )


def _deployment_payload() -> dict[str, object]:
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {
            "name": "web",
            "namespace": "team",
            "uid": "0b6f-uid",
            "annotations": {"cli-utils.sigs.k8s.io/on-remove": "keep"},
        },
        "spec": {"replicas": 2},
    }


def test_resource_paths() -> None:
    assert resource_path(DEPLOYMENTS, "team", "web") == (
        "/apis/apps/v1/namespaces/team/deployments/web"
    )
    assert resource_path(CONFIGMAPS, "team", "cfg") == "/api/v1/namespaces/team/configmaps/cfg"
    assert resource_path(NAMESPACES, "", "team") == "/api/v1/namespaces/team"


def test_namespaced_path_requires_namespace() -> None:
    with pytest.raises(ValueError, match="needs a namespace"):
        resource_path(CONFIGMAPS, "", "cfg")


def test_get_returns_live_object() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=_deployment_payload())

    with _client(handler) as client:
        live = client.get(DEPLOYMENTS, "team", "web")

    assert requests[0].method == "GET"
    assert requests[0].url.path == "/apis/apps/v1/namespaces/team/deployments/web"
    assert live.identity == make_identity("Deployment", "web", namespace="team", group="apps")
    assert live.uid == "0b6f-uid"
    assert live.annotations == {"cli-utils.sigs.k8s.io/on-remove": "keep"}
    assert live.payload["spec"] == {"replicas": 2}


def test_get_tolerates_missing_annotations() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "apiVersion": "v1",
                "kind": "Namespace",
                "metadata": {"name": "team", "uid": "ns-uid", "annotations": None},
            },
        )

    with _client(handler) as client:
        live = client.get(NAMESPACES, "", "team")

    assert live.identity == make_identity("Namespace", "team", namespace="")
    assert live.annotations == {}


def test_get_maps_404_to_not_found() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={"kind": "Status", "message": 'deployments "web" not found', "code": 404},
        )

    with _client(handler) as client, pytest.raises(NotFoundError, match="not found"):
        client.get(DEPLOYMENTS, "team", "web")


def test_get_raises_api_error_for_other_failures() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            403,
            json={"kind": "Status", "message": "forbidden", "reason": "Forbidden", "code": 403},
        )

    with _client(handler) as client, pytest.raises(ClusterAPIError) as exc:
        client.get(DEPLOYMENTS, "team", "web")

    assert exc.value.status_code == 403
    assert exc.value.reason == "Forbidden"
    assert "forbidden" in str(exc.value)


def test_non_json_error_body_is_reported() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with _client(handler) as client, pytest.raises(ClusterAPIError, match="bad gateway"):
        client.get(DEPLOYMENTS, "team", "web")


def test_delete_sends_propagation_policy() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"kind": "Status", "status": "Success"})

    with _client(handler) as client:
        client.delete(
            DEPLOYMENTS, "team", "web", propagation_policy=PropagationPolicy.FOREGROUND
        )

    request = requests[0]
    assert request.method == "DELETE"
    assert request.url.path == "/apis/apps/v1/namespaces/team/deployments/web"
    assert json.loads(request.content) == {
        "apiVersion": "v1",
        "kind": "DeleteOptions",
        "propagationPolicy": "Foreground",
    }


def test_delete_without_policy_omits_it() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    with _client(handler) as client:
        client.delete(CONFIGMAPS, "team", "cfg")

    assert "propagationPolicy" not in bodies[0]


def test_delete_failure_raises() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"message": "conflict", "reason": "Conflict"})

    with _client(handler) as client, pytest.raises(ClusterAPIError):
        client.delete(CONFIGMAPS, "team", "cfg")


def test_closing_client_closes_http_client() -> None:
    http_client = httpx.Client(
        base_url="https://cluster.test",
        transport=httpx.MockTransport(lambda _request: httpx.Response(200, json={})),
    )

    with HttpClusterClient(http_client):
        assert not http_client.is_closed

    assert http_client.is_closed
