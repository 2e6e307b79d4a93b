"""Ports for talking to a Kubernetes-style cluster API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kubedeploy.domain.errors import ClusterCommunicationError
    from kubedeploy.domain.model import ResourceDocument


@runtime_checkable
class ClusterHandle(Protocol):
    """Authenticated cluster connection borrowed for one apply call.

    Implementations raise ``ClusterCommunicationError`` (or a subclass) for any
    transport or API failure.
    """

    @property
    def api_server(self) -> str: ...

    def namespace(self) -> str | None: ...

    def create_or_replace(self, resource: ResourceDocument, namespace: str) -> None: ...


class ClusterErrorClassifier(Protocol):
    """Enrich a cluster error with diagnostics before it is re-raised."""

    def __call__(self, error: ClusterCommunicationError) -> None: ...


__all__ = ["ClusterErrorClassifier", "ClusterHandle"]
