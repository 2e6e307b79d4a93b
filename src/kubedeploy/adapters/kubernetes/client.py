"""Kubernetes REST client implementing the cluster port."""

from __future__ import annotations

import copy
import ssl
from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel

from kubedeploy.adapters.http_resilience import ResilientClient

from .errors import KubernetesAPIError
from .schema import APIResourceList, ObjectPayload

if TYPE_CHECKING:
    from types import TracebackType

    from kubedeploy.config.cluster import ClusterConfig
    from kubedeploy.domain.model import ResourceDocument

log = getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)

CORE_API_PREFIX = "/api"
GROUP_API_PREFIX = "/apis"


@dataclass(frozen=True, slots=True)
class ResourceEndpoint:
    """Where a resource kind lives on the API server."""

    group_version_path: str
    plural: str
    namespaced: bool

    def collection_url(self, namespace: str | None) -> str:
        if self.namespaced and namespace:
            return f"{self.group_version_path}/namespaces/{namespace}/{self.plural}"
        return f"{self.group_version_path}/{self.plural}"

    def item_url(self, name: str, namespace: str | None) -> str:
        return f"{self.collection_url(namespace)}/{name}"


def group_version_path(api_version: str) -> str:
    """Map ``v1`` to ``/api/v1`` and ``apps/v1`` to ``/apis/apps/v1``."""
    if "/" in api_version:
        return f"{GROUP_API_PREFIX}/{api_version}"
    return f"{CORE_API_PREFIX}/{api_version}"


def _tls_verify(config: ClusterConfig) -> ssl.SSLContext | bool:
    if not config.verify_tls:
        return False
    if config.ca_file is not None:
        return ssl.create_default_context(cafile=str(config.ca_file))
    return True


def _default_http_client(config: ClusterConfig) -> ResilientClient:
    headers = {"Accept": "application/json"}
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    resilience = replace(config.resilience, base_url=config.api_server).with_headers(headers)
    return ResilientClient(resilience, verify=_tls_verify(config))


class KubernetesClient:
    """Create-or-replace access to one API server.

    Resource kinds are resolved through API discovery, so any served kind
    (including custom resources) can be applied without a client-side model.
    """

    def __init__(
        self,
        config: ClusterConfig,
        *,
        http_client: ResilientClient | httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._http = http_client if http_client is not None else _default_http_client(config)
        self._discovery: dict[str, APIResourceList] = {}

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @property
    def api_server(self) -> str:
        return self._config.api_server

    def namespace(self) -> str | None:
        return self._config.namespace

    def create_or_replace(self, resource: ResourceDocument, namespace: str) -> None:
        endpoint = self.endpoint_for(resource)
        target_namespace = namespace if endpoint.namespaced else None
        body = _request_body(resource, target_namespace)

        collection_url = endpoint.collection_url(target_namespace)
        response = self._send("POST", collection_url, resource, json=body)
        if response.status_code != httpx.codes.CONFLICT:
            self._check(response, resource)
            log.debug("Created %s %s", resource.kind, resource.name)
            return

        item_url = endpoint.item_url(resource.name, target_namespace)
        existing = self._check(self._send("GET", item_url, resource), resource)
        resource_version = _decode(existing, ObjectPayload, resource).metadata.resource_version
        if resource_version is not None:
            body["metadata"]["resourceVersion"] = resource_version
        self._check(self._send("PUT", item_url, resource, json=body), resource)
        log.debug("Replaced %s %s", resource.kind, resource.name)

    def endpoint_for(self, resource: ResourceDocument) -> ResourceEndpoint:
        path = group_version_path(resource.api_version)
        listing = self._discover(path, resource)
        for api_resource in listing.resources:
            if "/" in api_resource.name:
                continue
            if api_resource.kind == resource.kind:
                return ResourceEndpoint(
                    group_version_path=path,
                    plural=api_resource.name,
                    namespaced=api_resource.namespaced,
                )
        raise KubernetesAPIError(
            f"Kind {resource.kind} is not served by {resource.api_version} "
            f"on {self.api_server}",
            status_code=httpx.codes.NOT_FOUND,
            reason="NotFound",
            resource_key=resource.key,
        )

    def _discover(self, path: str, resource: ResourceDocument) -> APIResourceList:
        cached = self._discovery.get(path)
        if cached is not None:
            return cached
        response = self._check(self._send("GET", path, resource), resource)
        listing = _decode(response, APIResourceList, resource)
        self._discovery[path] = listing
        return listing

    def _send(
        self,
        method: str,
        url: str,
        resource: ResourceDocument,
        *,
        json: object | None = None,
    ) -> httpx.Response:
        try:
            if json is None:
                return self._http.request(method, url)
            return self._http.request(method, url, json=json)
        except httpx.TransportError as exc:
            raise KubernetesAPIError.from_transport_error(
                exc, api_server=self.api_server, resource=resource
            ) from exc

    @staticmethod
    def _check(response: httpx.Response, resource: ResourceDocument) -> httpx.Response:
        if response.is_success:
            return response
        raise KubernetesAPIError.from_response(response, resource=resource)


def _decode(
    response: httpx.Response,
    model: type[TModel],
    resource: ResourceDocument,
) -> TModel:
    try:
        return model.model_validate(response.json())
    except ValueError as exc:
        raise KubernetesAPIError(
            f"Unexpected payload from {response.request.method} {response.request.url}: {exc}",
            status_code=response.status_code,
            resource_key=resource.key,
        ) from exc


def _request_body(resource: ResourceDocument, namespace: str | None) -> dict[str, Any]:
    body: dict[str, Any] = copy.deepcopy(dict(resource.body))
    body.setdefault("apiVersion", resource.api_version)
    body.setdefault("kind", resource.kind)
    metadata = dict(body.get("metadata") or {})
    metadata.setdefault("name", resource.name)
    if namespace is not None:
        metadata["namespace"] = namespace
    body["metadata"] = metadata
    return body
