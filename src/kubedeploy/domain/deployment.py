"""Deploy entry point: validate the image build, pick a target, apply."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .apply import apply_manifest
from .errors import AmbiguousImageBuilderError, NoImageBuilderError
from .images import has_registry
from .model import CONTAINER_IMAGE_PROVIDERS, S2I
from .targets import select_target

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .model import (
        ContainerImageInfo,
        DeploymentResult,
        DeploymentTarget,
        ImageBuildProvenance,
    )
    from .ports import ClusterErrorClassifier, ClusterHandle, ManifestParser

log = getLogger(__name__)


def resolve_image_build(image_results: Sequence[ImageBuildProvenance]) -> ImageBuildProvenance:
    """Return the single image build result, refusing to guess between several."""

    if not image_results:
        raise NoImageBuilderError(supported=CONTAINER_IMAGE_PROVIDERS)
    if len(image_results) > 1:
        raise AmbiguousImageBuilderError(
            providers=[result.provider for result in image_results],
            supported=CONTAINER_IMAGE_PROVIDERS,
        )
    return image_results[0]


def warn_if_unpushed(image_info: ContainerImageInfo, provenance: ImageBuildProvenance) -> bool:
    """Log a hint when the image will never reach a registry. Returns True if warned."""

    if has_registry(image_info.image) or provenance.provider == S2I:
        return False
    log.warning(
        "A Kubernetes deployment was requested, but the container image %s will not be "
        "pushed to any registry because its reference has no registry host. The "
        "deployment will only work properly if the cluster is using the local Docker daemon.",
        image_info.image or "<unset>",
    )
    return True


def deploy(
    *,
    client: ClusterHandle,
    image_info: ContainerImageInfo,
    image_results: Sequence[ImageBuildProvenance],
    candidates: Sequence[DeploymentTarget],
    output_dir: Path,
    parse_manifest: ManifestParser,
    classify_error: ClusterErrorClassifier,
) -> DeploymentResult:
    provenance = resolve_image_build(image_results)
    warn_if_unpushed(image_info, provenance)
    target = select_target(candidates, provenance)
    return apply_manifest(
        target,
        client,
        output_dir,
        parse_manifest=parse_manifest,
        classify_error=classify_error,
    )
