from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from kprune.adapters.kubernetes import ManifestError, load_manifest, parse_manifest
from kprune.domain.model import INVENTORY_LABEL, split_inventory
from tests.helpers.cluster import make_identity

if TYPE_CHECKING:
    from pathlib import Path

INVENTORY_OBJECT: dict[str, object] = {
    "apiVersion": "v1",
    "kind": "ConfigMap",
    "metadata": {
        "name": "inventory",
        "namespace": "team",
        "labels": {INVENTORY_LABEL: "team-app"},
    },
}
DEPLOYMENT: dict[str, object] = {
    "apiVersion": "apps/v1",
    "kind": "Deployment",
    "metadata": {"name": "web", "namespace": "team"},
    "spec": {"replicas": 1},
}


def test_parse_list_of_objects() -> None:
    infos = parse_manifest([INVENTORY_OBJECT, DEPLOYMENT])

    inventory, objects = split_inventory(infos)

    assert inventory.inventory_id == "team-app"
    assert [info.identity for info in objects] == [
        make_identity("Deployment", "web", namespace="team", group="apps")
    ]


def test_parse_list_kind_document() -> None:
    infos = parse_manifest({"apiVersion": "v1", "kind": "List", "items": [DEPLOYMENT]})

    assert len(infos) == 1
    assert infos[0].identity.group_kind.kind == "Deployment"


def test_parse_single_object() -> None:
    (info,) = parse_manifest(INVENTORY_OBJECT)

    assert info.is_inventory


@pytest.mark.parametrize(
    "document",
    [
        [{"kind": "ConfigMap", "metadata": {"name": "x"}}],
        {"apiVersion": "v1", "kind": "ConfigMap"},
        "not an object",
    ],
)
def test_invalid_documents_raise_manifest_error(document: object) -> None:
    with pytest.raises(ManifestError):
        parse_manifest(document)


def test_load_manifest_from_file(tmp_path: Path) -> None:
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps([INVENTORY_OBJECT, DEPLOYMENT]), encoding="utf-8")

    assert len(load_manifest(path)) == 2


def test_load_manifest_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "manifest.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ManifestError, match="not valid JSON"):
        load_manifest(path)
