"""Errors raised by the Kubernetes HTTP adapter."""

from __future__ import annotations

from kprune.domain.errors import PruneError


class ClusterAPIError(PruneError):
    """Raised when the API server rejects a request."""

    def __init__(self, message: str, *, status_code: int, reason: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
