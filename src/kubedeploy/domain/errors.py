"""Failure kinds raised by a deploy invocation.

Every error is fatal to the invocation. Callers that need to tell setup
problems from cluster or data problems branch on ``DeployError.kind``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class DeployErrorKind(StrEnum):
    NO_IMAGE_BUILDER = "no_image_builder"
    AMBIGUOUS_IMAGE_BUILDER = "ambiguous_image_builder"
    MANIFEST_NOT_FOUND = "manifest_not_found"
    CLUSTER_COMMUNICATION = "cluster_communication"
    TARGET_RESOURCE_MISSING = "target_resource_missing"
    MANIFEST_CLOSE = "manifest_close"


class DeployError(RuntimeError):
    """Base class for deploy failures."""

    kind: ClassVar[DeployErrorKind]


def _quoted(names: Sequence[str]) -> str:
    return ", ".join(f'"{name}"' for name in names)


class NoImageBuilderError(DeployError):
    kind = DeployErrorKind.NO_IMAGE_BUILDER

    def __init__(self, *, supported: Sequence[str]) -> None:
        self.supported = tuple(supported)
        super().__init__(
            "A Kubernetes deployment was requested but no container image builder "
            f"produced an image. Consider enabling one of: {_quoted(self.supported)}."
        )


class AmbiguousImageBuilderError(DeployError):
    kind = DeployErrorKind.AMBIGUOUS_IMAGE_BUILDER

    def __init__(self, *, providers: Sequence[str], supported: Sequence[str]) -> None:
        self.providers = tuple(providers)
        self.supported = tuple(supported)
        super().__init__(
            "Using multiple container image builders is not supported "
            f"(got {_quoted(self.providers)}). Please select one of: {_quoted(self.supported)}."
        )


class ManifestNotFoundError(DeployError):
    kind = DeployErrorKind.MANIFEST_NOT_FOUND

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Can't find generated kubernetes manifest: {path.absolute()}")


class ClusterCommunicationError(DeployError):
    """Raised by cluster adapters when a request cannot be completed."""

    kind = DeployErrorKind.CLUSTER_COMMUNICATION

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TargetResourceMissingError(DeployError):
    kind = DeployErrorKind.TARGET_RESOURCE_MISSING

    def __init__(self, *, resource_kind: str, path: Path) -> None:
        self.resource_kind = resource_kind
        self.path = path
        super().__init__(f"No {resource_kind} found under: {path.absolute()}")


class ManifestCloseError(DeployError):
    kind = DeployErrorKind.MANIFEST_CLOSE

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Error closing file: {path.absolute()}")
