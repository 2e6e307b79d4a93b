"""Parse multi-document YAML manifests into resource documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from kubedeploy.domain.model import ResourceDocument

from .schema import ResourcePayload

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import TextIO

    from kubedeploy.domain.ports import ManifestParser

LIST_KIND_SUFFIX = "List"


class ManifestParseError(ValueError):
    """Raised when a manifest document is not a usable resource."""

    def __init__(self, message: str, *, document_index: int) -> None:
        super().__init__(f"Document {document_index}: {message}")
        self.document_index = document_index


def parse_manifest(stream: TextIO) -> list[ResourceDocument]:
    """Return every resource in ``stream`` in document order.

    Empty documents are skipped and ``*List`` documents are flattened into
    their items. YAML syntax errors propagate unchanged.
    """

    resources: list[ResourceDocument] = []
    for index, document in enumerate(yaml.safe_load_all(stream)):
        if document is None:
            continue
        resources.extend(
            parse_resource(item, document_index=index) for item in _items(document, index)
        )
    return resources


def parse_resource(payload: object, *, document_index: int = 0) -> ResourceDocument:
    if not isinstance(payload, Mapping):
        raise ManifestParseError(
            f"expected a mapping, got {type(payload).__name__}",
            document_index=document_index,
        )
    try:
        validated = ResourcePayload.model_validate(payload)
    except ValidationError as exc:
        raise ManifestParseError(str(exc), document_index=document_index) from exc

    metadata = validated.metadata
    return ResourceDocument(
        api_version=validated.api_version,
        kind=validated.kind,
        name=metadata.name,
        labels=metadata.labels,
        body=dict(payload),
    )


def _items(document: Any, index: int) -> Iterator[Any]:
    if isinstance(document, Mapping):
        kind = document.get("kind")
        items = document.get("items")
        if isinstance(kind, str) and kind.endswith(LIST_KIND_SUFFIX) and isinstance(items, list):
            yield from items
            return
        yield document
        return
    raise ManifestParseError(
        f"expected a mapping, got {type(document).__name__}",
        document_index=index,
    )


if TYPE_CHECKING:
    _parser_check: ManifestParser = parse_manifest
