"""Kubernetes API errors and operator-facing diagnostics."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from kubedeploy.config.cluster import CA_FILE_VAR, INSECURE_VAR
from kubedeploy.domain.errors import ClusterCommunicationError

from .schema import StatusPayload

if TYPE_CHECKING:
    from kubedeploy.domain.model import ResourceDocument
    from kubedeploy.domain.ports import ClusterErrorClassifier

log = getLogger(__name__)

_MAX_BODY_CHARS = 500


class KubernetesAPIError(ClusterCommunicationError):
    """Raised when the API server rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
        resource_key: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.reason = reason
        self.resource_key = resource_key

    @classmethod
    def from_response(
        cls,
        response: httpx.Response,
        *,
        resource: ResourceDocument | None = None,
    ) -> KubernetesAPIError:
        status = _status_payload(response)
        detail = (status.message if status else None) or response.text[:_MAX_BODY_CHARS]
        reason = (status.reason if status else None) or response.reason_phrase
        request = response.request
        subject = f" for {resource.kind} {resource.name}" if resource is not None else ""
        return cls(
            f"Failure executing: {request.method} at: {request.url}{subject}. "
            f"Status {response.status_code} ({reason}): {detail}",
            status_code=response.status_code,
            reason=reason,
            resource_key=resource.key if resource is not None else None,
        )

    @classmethod
    def from_transport_error(
        cls,
        exc: httpx.TransportError,
        *,
        api_server: str,
        resource: ResourceDocument | None = None,
    ) -> KubernetesAPIError:
        subject = f" while applying {resource.kind} {resource.name}" if resource else ""
        return cls(
            f"Cannot communicate with Kubernetes API server {api_server}{subject}: {exc}",
            resource_key=resource.key if resource is not None else None,
        )


def _status_payload(response: httpx.Response) -> StatusPayload | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict) or payload.get("kind") != "Status":
        return None
    try:
        return StatusPayload.model_validate(payload)
    except ValidationError:
        return None


def classify_cluster_error(error: ClusterCommunicationError) -> None:
    """Attach an operator hint to ``error`` and log it. Never raises."""

    hint = cluster_error_hint(error)
    if hint is not None:
        error.add_note(hint)
    log.error("Kubernetes API request failed: %s%s", error, f" ({hint})" if hint else "")


def cluster_error_hint(error: ClusterCommunicationError) -> str | None:
    code = error.status_code
    if code is None:
        if _is_certificate_failure(error):
            return (
                "TLS verification of the API server failed. Point "
                f"{CA_FILE_VAR} at the cluster CA or set {INSECURE_VAR}=true."
            )
        return "The API server is unreachable. Check the server URL and network access."
    if code == httpx.codes.UNAUTHORIZED:
        return "Unauthorized! Token may have expired! Please log-in again."
    if code == httpx.codes.FORBIDDEN:
        return (
            "Forbidden! Check that the account may create and update this resource "
            "in the target namespace."
        )
    if code == httpx.codes.NOT_FOUND:
        return "Not found. The resource kind may not be served or the namespace may not exist."
    if code == httpx.codes.CONFLICT:
        return "Conflict. The resource was modified concurrently; run the deploy again."
    if code == httpx.codes.UNPROCESSABLE_ENTITY:
        return "The API server rejected the resource as invalid. Check the rendered manifest."
    if code == httpx.codes.TOO_MANY_REQUESTS or code >= httpx.codes.INTERNAL_SERVER_ERROR:
        return "The API server is overloaded or failing. Try again later."
    return None


def _is_certificate_failure(error: BaseException) -> bool:
    cause = error.__cause__
    while cause is not None:
        if "CERTIFICATE_VERIFY_FAILED" in str(cause):
            return True
        cause = cause.__cause__ or cause.__context__
    return False


if TYPE_CHECKING:
    _classifier_check: ClusterErrorClassifier = classify_cluster_error
