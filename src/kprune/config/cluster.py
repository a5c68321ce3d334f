"""Cluster API connection settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, env_number, optional_env_var, require_env_var

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ClusterConfig:
    """Where the API server lives and how to authenticate against it."""

    server: str
    token: str | None = None
    verify: bool | str = True
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


def get_cluster_config() -> ClusterConfig:
    server = require_env_var("KPRUNE_SERVER").strip().rstrip("/")
    verify: bool | str = True
    ca_cert = optional_env_var("KPRUNE_CA_CERT")
    if ca_cert is not None:
        verify = ca_cert
    if env_flag("KPRUNE_INSECURE_SKIP_TLS_VERIFY"):
        verify = False
    return ClusterConfig(
        server=server,
        token=optional_env_var("KPRUNE_TOKEN"),
        verify=verify,
        timeout_seconds=env_number(
            "KPRUNE_TIMEOUT_SECONDS", default=DEFAULT_TIMEOUT_SECONDS, cast=float
        ),
    )
