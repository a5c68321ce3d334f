"""HTTP client for fetching and deleting single objects through the API server."""

from __future__ import annotations

import ssl
from http import HTTPStatus
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from kprune.domain.errors import NotFoundError
from kprune.domain.model import LiveObject, ObjectIdentity

from .errors import ClusterAPIError
from .schema import ObjectPayload, StatusPayload

if TYPE_CHECKING:
    from types import TracebackType

    from kprune.config import ClusterConfig
    from kprune.domain.model import PropagationPolicy
    from kprune.domain.ports import ClusterClient, ResourceMapping

log = getLogger(__name__)


def group_version_path(group: str, version: str) -> str:
    if not group:
        return f"/api/{version}"
    return f"/apis/{group}/{version}"


def resource_path(mapping: ResourceMapping, namespace: str, name: str) -> str:
    base = group_version_path(mapping.group, mapping.version)
    if mapping.namespaced:
        if not namespace:
            raise ValueError(f"Namespaced resource {mapping.resource}/{name} needs a namespace")
        base = f"{base}/namespaces/{namespace}"
    return f"{base}/{mapping.resource}/{name}"


def build_http_client(
    config: ClusterConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    verify: bool | ssl.SSLContext = config.verify
    if isinstance(config.verify, str):
        verify = ssl.create_default_context(cafile=config.verify)
    return httpx.Client(
        base_url=config.server,
        headers=config.default_headers,
        timeout=config.timeout_seconds,
        verify=verify,
        transport=transport,
    )


def raise_for_api_status(response: httpx.Response) -> None:
    """Translate a failed API response into a domain error."""

    if response.is_success:
        return
    status = _parse_status(response)
    message = status.message or f"{response.request.method} {response.request.url.path} failed"
    if response.status_code == HTTPStatus.NOT_FOUND:
        raise NotFoundError(message)
    raise ClusterAPIError(message, status_code=response.status_code, reason=status.reason)


def _parse_status(response: httpx.Response) -> StatusPayload:
    try:
        return StatusPayload.model_validate(response.json())
    except (ValueError, ValidationError):
        return StatusPayload(message=response.text or None, code=response.status_code)


class HttpClusterClient:
    """``ClusterClient`` speaking the Kubernetes REST protocol over httpx.

    Closing it closes the wrapped ``httpx.Client``.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def __enter__(self) -> HttpClusterClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get(self, mapping: ResourceMapping, namespace: str, name: str) -> LiveObject:
        path = resource_path(mapping, namespace, name)
        response = self._client.get(path)
        raise_for_api_status(response)

        raw = response.json()
        payload = ObjectPayload.model_validate(raw)
        identity = ObjectIdentity.of(
            group=payload.group,
            kind=payload.kind,
            namespace=payload.metadata.namespace,
            name=payload.metadata.name,
        )
        return LiveObject(
            identity=identity,
            uid=payload.metadata.uid,
            annotations=payload.metadata.annotations,
            payload=raw,
        )

    def delete(
        self,
        mapping: ResourceMapping,
        namespace: str,
        name: str,
        *,
        propagation_policy: PropagationPolicy | None = None,
    ) -> None:
        path = resource_path(mapping, namespace, name)
        body: dict[str, Any] = {"apiVersion": "v1", "kind": "DeleteOptions"}
        if propagation_policy is not None:
            body["propagationPolicy"] = str(propagation_policy)
        log.debug("DELETE %s (propagationPolicy=%s)", path, propagation_policy)
        response = self._client.request("DELETE", path, json=body)
        raise_for_api_status(response)


if TYPE_CHECKING:
    _client_check: ClusterClient = HttpClusterClient(httpx.Client())
