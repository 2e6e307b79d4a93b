"""Pick the deployment target a build should be applied to."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .model import DEFAULT_TARGET, OPENSHIFT, S2I

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import DeploymentTarget, ImageBuildProvenance

log = getLogger(__name__)


def select_target(
    candidates: Iterable[DeploymentTarget],
    provenance: ImageBuildProvenance,
) -> DeploymentTarget:
    """Return the first acceptable candidate, falling back to a plain Deployment.

    An image built with source-to-image can only run as an OpenShift resource,
    so for that provider only ``openshift`` candidates are accepted.
    """

    s2i_build = provenance.provider == S2I
    for candidate in candidates:
        if not s2i_build or candidate.platform_name == OPENSHIFT:
            log.info(
                "Selected deployment target: platform=%s, kind=%s",
                candidate.platform_name,
                candidate.resource_kind,
            )
            return candidate

    # TODO: decide whether an s2i build without an openshift candidate should fail.
    log.info(
        "No matching deployment target for provider %s; using platform=%s, kind=%s",
        provenance.provider,
        DEFAULT_TARGET.platform_name,
        DEFAULT_TARGET.resource_kind,
    )
    return DEFAULT_TARGET
