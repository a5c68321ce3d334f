"""Loading the applied object set from JSON manifests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, cast

from pydantic import TypeAdapter

from kprune.domain.model import ObjectIdentity, ResourceInfo

from .schema import ObjectListPayload, ObjectPayload

if TYPE_CHECKING:
    from pathlib import Path

_PAYLOADS = TypeAdapter(list[ObjectPayload])


class ManifestError(ValueError):
    """Raised when a manifest document cannot be turned into resource descriptors."""


def to_resource_info(payload: ObjectPayload) -> ResourceInfo:
    identity = ObjectIdentity.of(
        group=payload.group,
        kind=payload.kind,
        namespace=payload.metadata.namespace,
        name=payload.metadata.name,
    )
    return ResourceInfo(
        identity=identity,
        labels=payload.metadata.labels,
    )


def parse_manifest(document: object) -> list[ResourceInfo]:
    """Accept a single object, a JSON array of objects or a ``List`` object."""

    try:
        if isinstance(document, list):
            payloads = _PAYLOADS.validate_python(document)
        elif isinstance(document, dict) and "items" in document:
            payloads = ObjectListPayload.model_validate(document).items
        else:
            payloads = [ObjectPayload.model_validate(document)]
    except ValueError as exc:
        raise ManifestError(f"Invalid manifest: {exc}") from exc
    return [to_resource_info(payload) for payload in payloads]


def load_manifest(path: Path) -> list[ResourceInfo]:
    try:
        with path.open(encoding="utf-8") as handle:
            document = cast(object, json.load(handle))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"{path} is not valid JSON: {exc}") from exc
    return parse_manifest(document)
