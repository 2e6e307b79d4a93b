"""Minimal Pydantic models for Kubernetes API server responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class KubernetesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class APIResource(KubernetesBaseModel):
    name: str
    kind: str
    namespaced: bool = False


class APIResourceList(KubernetesBaseModel):
    group_version: str = Field(alias="groupVersion")
    resources: list[APIResource] = Field(default_factory=list["APIResource"])


class StatusPayload(KubernetesBaseModel):
    status: str | None = None
    message: str | None = None
    reason: str | None = None
    code: int | None = None


class ObjectMetaPayload(KubernetesBaseModel):
    name: str | None = None
    resource_version: str | None = Field(default=None, alias="resourceVersion")


class ObjectPayload(KubernetesBaseModel):
    metadata: ObjectMetaPayload = Field(default_factory=ObjectMetaPayload)
