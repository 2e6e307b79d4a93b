"""Public interface for the Kubernetes adapter."""

from __future__ import annotations

from .client import KubernetesClient, ResourceEndpoint, group_version_path
from .errors import KubernetesAPIError, classify_cluster_error, cluster_error_hint
from .schema import APIResource, APIResourceList, StatusPayload

__all__ = [
    "APIResource",
    "APIResourceList",
    "KubernetesAPIError",
    "KubernetesClient",
    "ResourceEndpoint",
    "StatusPayload",
    "classify_cluster_error",
    "cluster_error_hint",
    "group_version_path",
]
