"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from kubedeploy.adapters.kubernetes import KubernetesClient, classify_cluster_error
from kubedeploy.adapters.manifest import parse_manifest
from kubedeploy.config import get_cluster_config
from kubedeploy.domain.deployment import deploy, resolve_image_build
from kubedeploy.domain.model import ContainerImageInfo, ImageBuildProvenance

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from kubedeploy.domain.model import DeploymentResult, DeploymentTarget

ClientFactory = Callable[[], KubernetesClient]


log = getLogger(__name__)


def build_kubernetes_client() -> KubernetesClient:
    return KubernetesClient(get_cluster_config())


def deploy_from_environment(
    *,
    output_dir: Path,
    candidates: Sequence[DeploymentTarget],
    providers: Sequence[str],
    image: str | None = None,
    client_factory: ClientFactory | None = None,
) -> DeploymentResult:
    """Deploy the rendered manifest using a cluster client built from the environment."""

    image_results = [ImageBuildProvenance(provider=provider) for provider in providers]
    # Builder validation must not depend on cluster configuration being present.
    resolve_image_build(image_results)
    log.info(
        "Starting deploy: output_dir=%s, candidates=%s, providers=%s, image=%s",
        output_dir,
        [f"{target.platform_name}:{target.resource_kind}" for target in candidates],
        list(providers),
        image,
    )

    factory = client_factory or build_kubernetes_client
    with factory() as client:
        result = deploy(
            client=client,
            image_info=ContainerImageInfo(image=image),
            image_results=image_results,
            candidates=candidates,
            output_dir=output_dir,
            parse_manifest=parse_manifest,
            classify_error=classify_cluster_error,
        )

    log.info("Finished deploy: name=%s, labels=%s", result.name, dict(result.labels))
    return result
