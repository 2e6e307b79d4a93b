"""Minimal Pydantic models for Kubernetes resource documents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_text(value: Any) -> Any:
    # Unquoted YAML scalars such as `version: 1.0` or `canary: true`.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return value


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ResourceMetadataPayload(ManifestBaseModel):
    name: str = Field(min_length=1)
    labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("labels", mode="before")
    @classmethod
    def _labels_as_text(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        return {key: _scalar_text(item) for key, item in value.items()}


class ResourcePayload(ManifestBaseModel):
    api_version: str = Field(alias="apiVersion", min_length=1)
    kind: str = Field(min_length=1)
    metadata: ResourceMetadataPayload
