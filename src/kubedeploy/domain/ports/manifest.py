"""Port for turning a manifest stream into resource documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from typing import TextIO

    from kubedeploy.domain.model import ResourceDocument


class ManifestParser(Protocol):
    def __call__(self, stream: TextIO) -> list[ResourceDocument]: ...


__all__ = ["ManifestParser"]
