"""Apply a rendered manifest to a cluster and report the primary workload.

Responsibilities of this stage:
- resolve the manifest written by the rendering step for the chosen platform
- submit each distinct resource, in manifest order, with create-or-replace
- stop at the first cluster failure; resources applied so far stay applied
- return the name and labels of the resource matching the target kind

Parsing, transport and error diagnostics are injected through the ports in
``kubedeploy.domain.ports``.
"""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from .deduplicate import deduplicate_resources
from .errors import (
    ClusterCommunicationError,
    ManifestCloseError,
    ManifestNotFoundError,
    TargetResourceMissingError,
)
from .model import DEFAULT_NAMESPACE, KUBERNETES, DeploymentResult

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path
    from typing import TextIO

    from .model import DeploymentTarget, ResourceDocument
    from .ports import ClusterErrorClassifier, ClusterHandle, ManifestParser

log = getLogger(__name__)

MANIFEST_SUFFIX = ".yml"


def manifest_path(output_dir: Path, target: DeploymentTarget) -> Path:
    """Location the rendering step writes the manifest for ``target`` to."""
    return output_dir / KUBERNETES / f"{target.platform_name.lower()}{MANIFEST_SUFFIX}"


def apply_manifest(
    target: DeploymentTarget,
    client: ClusterHandle,
    output_dir: Path,
    *,
    parse_manifest: ManifestParser,
    classify_error: ClusterErrorClassifier,
) -> DeploymentResult:
    """Apply the manifest for ``target`` and return the deployed workload."""

    namespace = client.namespace() or DEFAULT_NAMESPACE
    log.info(
        "Deploying to %s server: %s in namespace: %s.",
        target.platform_name.lower(),
        client.api_server,
        namespace,
    )
    path = manifest_path(output_dir, target)

    with open_manifest(path) as stream:
        resources = parse_manifest(stream)
        for resource in deduplicate_resources(resources):
            _apply_resource(client, resource, namespace, classify_error=classify_error)

        workload = _find_workload(resources, target.resource_kind)
        if workload is None:
            raise TargetResourceMissingError(resource_kind=target.resource_kind, path=path)

    log.info("Deployed %s %s.", workload.kind, workload.name)
    return DeploymentResult(name=workload.name, labels=workload.labels)


@contextmanager
def open_manifest(path: Path) -> Iterator[TextIO]:
    """Open ``path`` for reading and release it on every exit path.

    A failure to close the file only surfaces as ``ManifestCloseError`` when no
    other error is already propagating; otherwise it is logged.
    """

    try:
        stream = path.open(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as exc:
        raise ManifestNotFoundError(path) from exc

    try:
        yield stream
    except BaseException:
        try:
            stream.close()
        except OSError:
            log.warning("Error closing file: %s", path.absolute(), exc_info=True)
        raise

    try:
        stream.close()
    except OSError as exc:
        raise ManifestCloseError(path) from exc


def _apply_resource(
    client: ClusterHandle,
    resource: ResourceDocument,
    namespace: str,
    *,
    classify_error: ClusterErrorClassifier,
) -> None:
    try:
        client.create_or_replace(resource, namespace)
    except ClusterCommunicationError as exc:
        classify_error(exc)
        raise
    log.info("Applied: %s %s.", resource.kind, resource.name)


def _find_workload(
    resources: Sequence[ResourceDocument],
    resource_kind: str,
) -> ResourceDocument | None:
    return next((resource for resource in resources if resource.kind == resource_kind), None)
