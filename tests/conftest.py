"""Shared fixtures for stackctl tests."""

import pytest

from stackctl.constants import (
    ENV_EDGE_MARKERS,
    ENV_LOG_DIR,
    ENV_READ_ONLY,
    ENV_SERVER_URL,
    ENV_SKIP_TLS_VERIFY,
    ENV_TIMEOUT,
    ENV_TOKEN,
)
from stackctl.models.config import ServerConfig

STACKCTL_ENV_VARS = (
    ENV_SERVER_URL,
    ENV_TOKEN,
    ENV_SKIP_TLS_VERIFY,
    ENV_TIMEOUT,
    ENV_EDGE_MARKERS,
    ENV_READ_ONLY,
    ENV_LOG_DIR,
)


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(server_url="portainer.test:9443", token="test-token")


@pytest.fixture
def edge_only_config() -> ServerConfig:
    return ServerConfig()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run with an empty HOME/cwd and no STACKCTL_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in STACKCTL_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv(ENV_LOG_DIR, str(tmp_path / "logs"))
    return work
