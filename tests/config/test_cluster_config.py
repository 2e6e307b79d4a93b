from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from kubedeploy.config import ConfigurationError, MissingConfigurationError, get_cluster_config
from kubedeploy.config.cluster import (
    API_SERVER_VAR,
    CA_FILE_VAR,
    INSECURE_VAR,
    NAMESPACE_VAR,
    TIMEOUT_VAR,
    TOKEN_FILE_VAR,
    TOKEN_VAR,
)

if TYPE_CHECKING:
    from pathlib import Path

_VARS = (
    API_SERVER_VAR,
    TOKEN_VAR,
    TOKEN_FILE_VAR,
    CA_FILE_VAR,
    NAMESPACE_VAR,
    INSECURE_VAR,
    TIMEOUT_VAR,
    "KUBERNETES_SERVICE_HOST",
    "KUBERNETES_SERVICE_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_api_server_outside_cluster(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigurationError, match=API_SERVER_VAR):
        get_cluster_config(service_account_dir=tmp_path)


def test_explicit_configuration(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    ca_file = tmp_path / "ca.crt"
    monkeypatch.setenv(API_SERVER_VAR, "https://api.example.com:6443/")
    monkeypatch.setenv(TOKEN_VAR, "sha256~token")
    monkeypatch.setenv(CA_FILE_VAR, str(ca_file))
    monkeypatch.setenv(NAMESPACE_VAR, "team-a")
    monkeypatch.setenv(TIMEOUT_VAR, "12.5")

    config = get_cluster_config(service_account_dir=tmp_path)

    assert config.api_server == "https://api.example.com:6443"
    assert config.token == "sha256~token"
    assert config.ca_file == ca_file
    assert config.namespace == "team-a"
    assert config.verify_tls is True
    assert config.resilience.timeout_seconds == 12.5
    assert config.resilience.base_url == config.api_server


def test_token_file_and_insecure_flag(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    token_file = tmp_path / "token"
    token_file.write_text("from-file\n", encoding="utf-8")
    monkeypatch.setenv(API_SERVER_VAR, "https://api.example.com")
    monkeypatch.setenv(TOKEN_FILE_VAR, str(token_file))
    monkeypatch.setenv(INSECURE_VAR, "true")

    config = get_cluster_config(service_account_dir=tmp_path)

    assert config.token == "from-file"
    assert config.verify_tls is False
    assert config.namespace is None


def test_unreadable_token_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(API_SERVER_VAR, "https://api.example.com")
    monkeypatch.setenv(TOKEN_FILE_VAR, str(tmp_path / "missing"))

    with pytest.raises(ConfigurationError, match=TOKEN_FILE_VAR) as excinfo:
        get_cluster_config(service_account_dir=tmp_path)

    assert excinfo.value.variable == TOKEN_FILE_VAR


def test_in_cluster_service_account(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "token").write_text("pod-token\n", encoding="utf-8")
    (tmp_path / "ca.crt").write_text("---", encoding="utf-8")
    (tmp_path / "namespace").write_text("builds\n", encoding="utf-8")
    monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.0.0.1")
    monkeypatch.setenv("KUBERNETES_SERVICE_PORT", "443")

    config = get_cluster_config(service_account_dir=tmp_path)

    assert config.api_server == "https://10.0.0.1:443"
    assert config.token == "pod-token"
    assert config.ca_file == tmp_path / "ca.crt"
    assert config.namespace == "builds"


def test_in_cluster_ipv6_host_and_namespace_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    (tmp_path / "token").write_text("pod-token", encoding="utf-8")
    monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "fd00::1")
    monkeypatch.setenv("KUBERNETES_SERVICE_PORT", "443")
    monkeypatch.setenv(NAMESPACE_VAR, "override")

    config = get_cluster_config(service_account_dir=tmp_path)

    assert config.api_server == "https://[fd00::1]:443"
    assert config.ca_file is None
    assert config.namespace == "override"


def test_explicit_server_wins_over_in_cluster(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.0.0.1")
    monkeypatch.setenv("KUBERNETES_SERVICE_PORT", "443")
    monkeypatch.setenv(API_SERVER_VAR, "https://api.example.com")

    config = get_cluster_config(service_account_dir=tmp_path)

    assert config.api_server == "https://api.example.com"
    assert config.token is None


def test_in_cluster_without_token_is_a_configuration_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.0.0.1")
    monkeypatch.setenv("KUBERNETES_SERVICE_PORT", "443")

    with pytest.raises(ConfigurationError, match="service account token"):
        get_cluster_config(service_account_dir=tmp_path)
