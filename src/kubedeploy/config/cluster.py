"""Kubernetes API server connection settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_flag, env_float, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig

SERVICE_ACCOUNT_DIR: Final[Path] = Path("/var/run/secrets/kubernetes.io/serviceaccount")
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

API_SERVER_VAR: Final[str] = "KUBEDEPLOY_API_SERVER"
TOKEN_VAR: Final[str] = "KUBEDEPLOY_TOKEN"
TOKEN_FILE_VAR: Final[str] = "KUBEDEPLOY_TOKEN_FILE"
CA_FILE_VAR: Final[str] = "KUBEDEPLOY_CA_FILE"
NAMESPACE_VAR: Final[str] = "KUBEDEPLOY_NAMESPACE"
INSECURE_VAR: Final[str] = "KUBEDEPLOY_INSECURE_SKIP_TLS_VERIFY"
TIMEOUT_VAR: Final[str] = "KUBEDEPLOY_TIMEOUT_SECONDS"


@dataclass(frozen=True, slots=True)
class ClusterConfig:
    """Connection details for one Kubernetes API server."""

    api_server: str
    token: str | None
    ca_file: Path | None
    namespace: str | None
    verify_tls: bool
    resilience: ResilienceConfig


def get_cluster_config(*, service_account_dir: Path = SERVICE_ACCOUNT_DIR) -> ClusterConfig:
    """Build the cluster configuration from ``KUBEDEPLOY_*`` variables.

    When no API server is configured and the process runs inside a pod, the
    mounted service-account credentials are used instead.
    """

    timeout = env_float(TIMEOUT_VAR, default=DEFAULT_TIMEOUT_SECONDS)
    if optional_env_var(API_SERVER_VAR) is None and _running_in_cluster():
        return _in_cluster_config(service_account_dir, timeout_seconds=timeout)

    api_server = require_env_vars((API_SERVER_VAR,))[API_SERVER_VAR].strip().rstrip("/")
    ca_file = optional_env_var(CA_FILE_VAR)
    return ClusterConfig(
        api_server=api_server,
        token=_read_token(),
        ca_file=Path(ca_file) if ca_file else None,
        namespace=optional_env_var(NAMESPACE_VAR),
        verify_tls=not env_flag(INSECURE_VAR),
        resilience=ResilienceConfig(
            name="kubernetes",
            base_url=api_server,
            timeout_seconds=timeout,
        ),
    )


def _running_in_cluster() -> bool:
    return bool(os.getenv("KUBERNETES_SERVICE_HOST")) and bool(
        os.getenv("KUBERNETES_SERVICE_PORT")
    )


def _read_token() -> str | None:
    token = optional_env_var(TOKEN_VAR)
    if token is not None:
        return token
    token_file = optional_env_var(TOKEN_FILE_VAR)
    if token_file is None:
        return None
    try:
        return Path(token_file).read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read {TOKEN_FILE_VAR}: {token_file}", variable=TOKEN_FILE_VAR
        ) from exc


def _in_cluster_config(service_account_dir: Path, *, timeout_seconds: float) -> ClusterConfig:
    host = os.environ["KUBERNETES_SERVICE_HOST"]
    port = os.environ["KUBERNETES_SERVICE_PORT"]
    if ":" in host:
        host = f"[{host}]"
    api_server = f"https://{host}:{port}"

    token_path = service_account_dir / "token"
    try:
        token = token_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read service account token: {token_path}") from exc

    ca_path = service_account_dir / "ca.crt"
    namespace_path = service_account_dir / "namespace"
    namespace = optional_env_var(NAMESPACE_VAR)
    if namespace is None and namespace_path.is_file():
        namespace = namespace_path.read_text(encoding="utf-8").strip() or None

    return ClusterConfig(
        api_server=api_server,
        token=token,
        ca_file=ca_path if ca_path.is_file() else None,
        namespace=namespace,
        verify_tls=True,
        resilience=ResilienceConfig(
            name="kubernetes",
            base_url=api_server,
            timeout_seconds=timeout_seconds,
        ),
    )
