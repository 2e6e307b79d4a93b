"""Public interface for the manifest adapter."""

from __future__ import annotations

from .parser import ManifestParseError, parse_manifest, parse_resource
from .schema import ResourceMetadataPayload, ResourcePayload

__all__ = [
    "ManifestParseError",
    "ResourceMetadataPayload",
    "ResourcePayload",
    "parse_manifest",
    "parse_resource",
]
