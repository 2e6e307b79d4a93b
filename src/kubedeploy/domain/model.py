"""Value objects exchanged between the deploy stages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

KUBERNETES: Final[str] = "kubernetes"
OPENSHIFT: Final[str] = "openshift"
DEPLOYMENT: Final[str] = "Deployment"
DEPLOYMENT_CONFIG: Final[str] = "DeploymentConfig"
S2I: Final[str] = "s2i"
DEFAULT_NAMESPACE: Final[str] = "default"

CONTAINER_IMAGE_PROVIDERS: Final[tuple[str, ...]] = ("jib", "docker", S2I)


def _frozen(values: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(values or {}))


def _hashable(labels: Mapping[str, str]) -> tuple[tuple[str, str], ...]:
    return tuple(sorted(labels.items()))


@dataclass(frozen=True, slots=True)
class ResourceDocument:
    """One declarative resource parsed from a manifest."""

    api_version: str
    kind: str
    name: str
    labels: Mapping[str, str] = field(default_factory=dict[str, str])
    body: Mapping[str, Any] = field(default_factory=dict[str, Any], compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", _frozen(self.labels))
        object.__setattr__(self, "body", _frozen(self.body))

    def __hash__(self) -> int:
        return hash((self.api_version, self.kind, self.name, _hashable(self.labels)))

    @property
    def key(self) -> str:
        """Identity used to suppress duplicates within one apply batch."""
        return f"{self.api_version}/{self.kind}:{self.name}"


@dataclass(frozen=True, slots=True)
class DeploymentTarget:
    """Platform and workload kind the caller expects to deploy."""

    platform_name: str
    resource_kind: str


DEFAULT_TARGET: Final[DeploymentTarget] = DeploymentTarget(KUBERNETES, DEPLOYMENT)


@dataclass(frozen=True, slots=True)
class ImageBuildProvenance:
    """Which build strategy produced the container image."""

    provider: str


@dataclass(frozen=True, slots=True)
class ContainerImageInfo:
    image: str | None


@dataclass(frozen=True, slots=True)
class DeploymentResult:
    """Identity of the primary workload that was applied."""

    name: str
    labels: Mapping[str, str] = field(default_factory=dict[str, str])

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", _frozen(self.labels))

    def __hash__(self) -> int:
        return hash((self.name, _hashable(self.labels)))
