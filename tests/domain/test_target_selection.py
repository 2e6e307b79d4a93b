from __future__ import annotations

import pytest

from kubedeploy.domain.model import (
    DEFAULT_TARGET,
    DEPLOYMENT,
    DEPLOYMENT_CONFIG,
    KUBERNETES,
    OPENSHIFT,
    DeploymentTarget,
    ImageBuildProvenance,
)
from kubedeploy.domain.targets import select_target

KUBERNETES_TARGET = DeploymentTarget(KUBERNETES, DEPLOYMENT)
OPENSHIFT_TARGET = DeploymentTarget(OPENSHIFT, DEPLOYMENT_CONFIG)


@pytest.mark.parametrize("provider", ["jib", "docker", "s2i"])
def test_select_target_falls_back_to_kubernetes_deployment(provider: str) -> None:
    selected = select_target([], ImageBuildProvenance(provider=provider))

    assert selected == DeploymentTarget("kubernetes", "Deployment")
    assert selected is DEFAULT_TARGET


def test_select_target_takes_first_candidate_for_non_s2i_builds() -> None:
    candidates = [OPENSHIFT_TARGET, KUBERNETES_TARGET]

    selected = select_target(candidates, ImageBuildProvenance(provider="jib"))

    assert selected is OPENSHIFT_TARGET


def test_select_target_forces_openshift_for_s2i_builds() -> None:
    candidates = [KUBERNETES_TARGET, OPENSHIFT_TARGET]

    selected = select_target(candidates, ImageBuildProvenance(provider="s2i"))

    assert selected is OPENSHIFT_TARGET


def test_select_target_s2i_without_openshift_candidate_uses_default() -> None:
    knative = DeploymentTarget("knative", "Service")

    selected = select_target([knative, KUBERNETES_TARGET], ImageBuildProvenance(provider="s2i"))

    assert selected == DEFAULT_TARGET


def test_select_target_accepts_single_pass_iterables() -> None:
    selected = select_target(
        iter([KUBERNETES_TARGET, OPENSHIFT_TARGET]),
        ImageBuildProvenance(provider="s2i"),
    )

    assert selected is OPENSHIFT_TARGET
