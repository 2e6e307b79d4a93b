"""Domain port definitions for adapters."""

from __future__ import annotations

from .cluster import ClusterErrorClassifier, ClusterHandle
from .manifest import ManifestParser

__all__ = [
    "ClusterErrorClassifier",
    "ClusterHandle",
    "ManifestParser",
]
