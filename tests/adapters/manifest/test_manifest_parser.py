from __future__ import annotations

import io

import pytest
import yaml

from kubedeploy.adapters.manifest import ManifestParseError, parse_manifest, parse_resource
from kubedeploy.domain.model import ResourceDocument


def _parse(text: str) -> list[ResourceDocument]:
    return parse_manifest(io.StringIO(text))


def test_parse_manifest_keeps_document_order() -> None:
    resources = _parse(
        """\
apiVersion: v1
kind: ServiceAccount
metadata:
  name: runner
---
apiVersion: rbac.authorization.k8s.io/v1
kind: RoleBinding
metadata:
  name: runner-binding
  namespace: builds
"""
    )

    assert [resource.key for resource in resources] == [
        "v1/ServiceAccount:runner",
        "rbac.authorization.k8s.io/v1/RoleBinding:runner-binding",
    ]
    assert resources[1].body["metadata"]["namespace"] == "builds"


def test_parse_manifest_skips_empty_documents() -> None:
    resources = _parse("---\n---\napiVersion: v1\nkind: Secret\nmetadata:\n  name: creds\n---\n")

    assert [resource.name for resource in resources] == ["creds"]


def test_parse_manifest_of_empty_file_is_empty() -> None:
    assert _parse("") == []


def test_parse_manifest_flattens_list_documents() -> None:
    resources = _parse(
        """\
apiVersion: v1
kind: List
items:
  - apiVersion: v1
    kind: Service
    metadata:
      name: web
  - apiVersion: apps/v1
    kind: Deployment
    metadata:
      name: web
"""
    )

    assert [resource.kind for resource in resources] == ["Service", "Deployment"]


def test_parse_manifest_preserves_full_body() -> None:
    (resource,) = _parse(
        """\
apiVersion: v1
kind: ConfigMap
metadata:
  name: settings
  labels:
    tier: backend
data:
  LOG_LEVEL: debug
"""
    )

    assert resource.labels == {"tier": "backend"}
    assert resource.body["data"] == {"LOG_LEVEL": "debug"}
    assert resource.body["metadata"]["name"] == "settings"


def test_parse_resource_treats_null_labels_as_empty() -> None:
    resource = parse_resource(
        {"apiVersion": "v1", "kind": "Service", "metadata": {"name": "web", "labels": None}}
    )

    assert dict(resource.labels) == {}


def test_parse_manifest_reads_unquoted_label_scalars_as_text() -> None:
    (resource,) = _parse(
        """\
apiVersion: apps/v1
kind: Deployment
metadata:
  name: app
  labels:
    version: 1.0
    replicas: 3
    canary: true
    tier: web
"""
    )

    assert dict(resource.labels) == {
        "version": "1.0",
        "replicas": "3",
        "canary": "true",
        "tier": "web",
    }


def test_parse_resource_still_rejects_nested_label_values() -> None:
    with pytest.raises(ManifestParseError):
        parse_resource(
            {
                "apiVersion": "v1",
                "kind": "Service",
                "metadata": {"name": "web", "labels": {"nested": {"a": "b"}}},
            }
        )


@pytest.mark.parametrize(
    "payload",
    [
        {"kind": "Service", "metadata": {"name": "web"}},
        {"apiVersion": "v1", "metadata": {"name": "web"}},
        {"apiVersion": "v1", "kind": "Service"},
        {"apiVersion": "v1", "kind": "Service", "metadata": {"name": ""}},
        ["not", "a", "mapping"],
    ],
)
def test_parse_resource_rejects_unusable_payloads(payload: object) -> None:
    with pytest.raises(ManifestParseError) as excinfo:
        parse_resource(payload, document_index=3)

    assert excinfo.value.document_index == 3
    assert str(excinfo.value).startswith("Document 3:")


def test_parse_manifest_reports_failing_document_index() -> None:
    with pytest.raises(ManifestParseError) as excinfo:
        _parse("apiVersion: v1\nkind: Service\nmetadata:\n  name: ok\n---\n- just\n- a list\n")

    assert excinfo.value.document_index == 1


def test_parse_manifest_propagates_yaml_syntax_errors() -> None:
    with pytest.raises(yaml.YAMLError):
        _parse("apiVersion: v1\nkind: [Service\n")
