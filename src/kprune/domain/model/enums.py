"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class DryRunStrategy(StrEnum):
    """Whether mutating calls are sent to the cluster."""

    NONE = "none"
    CLIENT = "client"
    SERVER = "server"

    def client_or_server_dry_run(self) -> bool:
        return self is not DryRunStrategy.NONE


class PropagationPolicy(StrEnum):
    """Cascade policy forwarded verbatim to delete calls."""

    FOREGROUND = "Foreground"
    BACKGROUND = "Background"
    ORPHAN = "Orphan"


class PruneEventOperation(StrEnum):
    PRUNED = "pruned"
    SKIPPED = "skipped"
