from __future__ import annotations

import pytest

from kprune.domain.errors import MalformedInputError
from kprune.domain.model import (
    INVENTORY_LABEL,
    DryRunStrategy,
    GroupKind,
    Inventory,
    ObjectIdentity,
    ResourceInfo,
    split_inventory,
)
from tests.helpers.cluster import make_identity, make_info, make_inventory_info


def test_group_kind_string_form() -> None:
    assert str(GroupKind(group="", kind="ConfigMap")) == "ConfigMap"
    assert str(GroupKind(group="apps", kind="Deployment")) == "Deployment.apps"


def test_identity_equality_is_by_value() -> None:
    first = ObjectIdentity.of(group="apps", kind="Deployment", namespace="ns", name="web")
    second = ObjectIdentity.of(group="apps", kind="Deployment", namespace="ns", name="web")

    assert first == second
    assert len({first, second}) == 1


def test_identity_string_form() -> None:
    identity = make_identity("Deployment", "web", namespace="team", group="apps")
    cluster_scoped = make_identity("Namespace", "team", namespace="")

    assert str(identity) == "team_web_apps_Deployment"
    assert str(cluster_scoped) == "_team__Namespace"


def test_split_inventory_separates_inventory_object() -> None:
    inventory_info = make_inventory_info(name="inv", namespace="team", inventory_id="abc")
    objects = [make_info(make_identity("ConfigMap", "a")), make_info(make_identity("Secret", "b"))]

    inventory, local = split_inventory([objects[0], inventory_info, objects[1]])

    assert inventory == Inventory(namespace="team", name="inv", inventory_id="abc")
    assert local == objects


def test_split_inventory_requires_an_inventory_object() -> None:
    with pytest.raises(MalformedInputError, match="does not contain"):
        split_inventory([make_info(make_identity("ConfigMap", "a"))])


def test_inventory_label_must_not_be_blank() -> None:
    info = ResourceInfo(
        identity=make_identity("ConfigMap", "inv"),
        labels={INVENTORY_LABEL: "  "},
    )

    with pytest.raises(MalformedInputError, match="empty"):
        split_inventory([info])


def test_dry_run_strategy_mutation_flag() -> None:
    assert not DryRunStrategy.NONE.client_or_server_dry_run()
    assert DryRunStrategy.CLIENT.client_or_server_dry_run()
    assert DryRunStrategy.SERVER.client_or_server_dry_run()
