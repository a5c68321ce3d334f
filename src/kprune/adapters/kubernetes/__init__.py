"""Kubernetes API adapter: HTTP client, discovery and manifest loading."""

from __future__ import annotations

from .client import HttpClusterClient, build_http_client
from .discovery import BUILTIN_MAPPINGS, DiscoveryResourceResolver, StaticResourceResolver
from .errors import ClusterAPIError
from .manifest import ManifestError, load_manifest, parse_manifest

__all__ = [
    "BUILTIN_MAPPINGS",
    "ClusterAPIError",
    "DiscoveryResourceResolver",
    "HttpClusterClient",
    "ManifestError",
    "StaticResourceResolver",
    "build_http_client",
    "load_manifest",
    "parse_manifest",
]
