"""Container image reference helpers."""

from __future__ import annotations


def has_registry(image: str | None) -> bool:
    """Return True when the reference starts with a registry host.

    Follows the Docker reference grammar: the first path component is a
    registry only if more components follow and it looks like a host
    (contains ``.`` or ``:``, or is ``localhost``).
    """

    if not image:
        return False
    head, sep, _ = image.partition("/")
    if not sep:
        return False
    return "." in head or ":" in head or head == "localhost"
