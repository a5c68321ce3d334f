from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from kprune.app import PruneSummary
from kprune.domain.model import DryRunStrategy, LiveObject, PropagationPolicy, PruneEvent
from kprune.ui import cli
from tests.helpers.cluster import make_identity

if TYPE_CHECKING:
    from collections.abc import Callable

    from kprune.domain.model import ObjectIdentity


def test_parse_prune_arguments() -> None:
    args = cli._parse_args(
        [
            "prune",
            "--manifest",
            "apply.json",
            "--dry-run",
            "server",
            "--propagation-policy",
            "Foreground",
            "--static-mappings",
        ]
    )

    assert args.command == "prune"
    assert args.manifest == Path("apply.json")
    assert args.dry_run is DryRunStrategy.SERVER
    assert args.propagation_policy is PropagationPolicy.FOREGROUND
    assert args.static_mappings is True


def test_parse_prune_defaults() -> None:
    args = cli._parse_args(["prune", "--manifest", "apply.json"])

    assert args.dry_run is DryRunStrategy.NONE
    assert args.propagation_policy is None
    assert args.static_mappings is False
    assert args.verbose is False


def test_unknown_dry_run_value_is_rejected() -> None:
    with pytest.raises(SystemExit) as exc:
        cli._parse_args(["prune", "--manifest", "apply.json", "--dry-run", "sometimes"])

    assert exc.value.code == 2


def test_main_runs_prune(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []

    def fake_prune(
        manifest: Path,
        *,
        dry_run: DryRunStrategy,
        propagation_policy: PropagationPolicy | None,
        static_mappings: bool,
        on_event: Callable[[PruneEvent], None],
    ) -> PruneSummary:
        calls.append(
            {
                "manifest": manifest,
                "dry_run": dry_run,
                "propagation_policy": propagation_policy,
                "static_mappings": static_mappings,
            }
        )
        return PruneSummary(dry_run=dry_run)

    monkeypatch.setattr(cli, "prune_manifest", fake_prune)
    monkeypatch.setattr(cli, "configure_logging", lambda **_: None)

    cli.main(["prune", "--manifest", "apply.json", "--dry-run", "client"])

    assert calls == [
        {
            "manifest": Path("apply.json"),
            "dry_run": DryRunStrategy.CLIENT,
            "propagation_policy": None,
            "static_mappings": False,
        }
    ]


def test_main_shows_inventory(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    requested: list[Path] = []

    def fake_recorded(manifest: Path) -> list[ObjectIdentity]:
        requested.append(manifest)
        return [make_identity("ConfigMap", "settings")]

    monkeypatch.setattr(cli, "recorded_objects", fake_recorded)
    monkeypatch.setattr(cli, "configure_logging", lambda **_: None)

    cli.main(["inventory", "show", "--manifest", "apply.json"])

    assert requested == [Path("apply.json")]
    assert capsys.readouterr().out == "default_settings__ConfigMap\n"


def test_main_exits_non_zero_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_prune(*_args: object, **_kwargs: object) -> PruneSummary:
        raise RuntimeError("cluster unreachable")

    monkeypatch.setattr(cli, "prune_manifest", failing_prune)
    monkeypatch.setattr(cli, "configure_logging", lambda **_: None)

    with pytest.raises(SystemExit) as exc:
        cli.main(["prune", "--manifest", "apply.json"])

    assert exc.value.code == 1


def test_log_event_reports_identity_and_operation(caplog: pytest.LogCaptureFixture) -> None:
    identity = make_identity("ConfigMap", "settings")

    event = PruneEvent.pruned(LiveObject(identity=identity, uid="uid-1"))

    with caplog.at_level("INFO", logger=cli.__name__):
        cli._log_event(event)

    assert "default_settings__ConfigMap pruned" in caplog.text
