"""
Global pytest configuration and fixtures.
"""

from pathlib import Path

import pytest

from secretref.config import (
    FileSecretsConfigModel,
    ResolverConfigModel,
    UserSecretsConfigModel,
    VaultConfigModel,
)
from secretref.engine import ResolverEngine, set_default_engine

from tests.secret_testkit import DNS_SUFFIX, FakeVaultClient


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's real settings, user secrets and default engine out of tests."""
    for var in ("SECRETREF_CONFIG", "SECRETREF_USER_SECRETS_ID", "SECRETREF_DEBUG", "VAULT_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    set_default_engine(None)
    yield
    set_default_engine(None)


@pytest.fixture
def fake_vault() -> FakeVaultClient:
    return FakeVaultClient()


@pytest.fixture
def user_secrets_root(tmp_path) -> Path:
    return tmp_path / "usersecrets"


@pytest.fixture
def secrets_dir(tmp_path) -> Path:
    path = tmp_path / "secrets"
    path.mkdir()
    return path


@pytest.fixture
def make_engine(user_secrets_root, secrets_dir, fake_vault):
    """Build an engine whose resolvers only look at the test's temporary directories."""

    def _make(user_secrets_id: str | None = None, vault_enabled: bool = True) -> ResolverEngine:
        config = ResolverConfigModel(
            user_secrets=UserSecretsConfigModel(id=user_secrets_id, root=str(user_secrets_root)),
            file=FileSecretsConfigModel(search_paths=[str(secrets_dir)]),
            vault=VaultConfigModel(enabled=vault_enabled, dns_suffix=DNS_SUFFIX, timeout=5),
        )
        return ResolverEngine(config, vault_client_factory=lambda: fake_vault)

    return _make
