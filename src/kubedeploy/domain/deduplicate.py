"""Intra-batch deduplication of manifest resources."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import ResourceDocument


def deduplicate_resources(
    resources: Iterable[ResourceDocument],
    *,
    seen: set[str] | None = None,
) -> list[ResourceDocument]:
    """Keep the first resource per identity key, preserving manifest order.

    ``seen`` is filled with every key encountered; callers that do not pass
    one get a fresh set per call.
    """

    seen_keys: set[str] = set() if seen is None else seen
    survivors: list[ResourceDocument] = []
    for resource in resources:
        key = resource.key
        if key in seen_keys:
            continue
        seen_keys.add(key)
        survivors.append(resource)
    return survivors
