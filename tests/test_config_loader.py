"""Tests for loading resolver configuration."""

import pytest

from secretref.config import (
    ResolverConfigModel,
    VaultConfigModel,
    build_resolver_config,
    load_resolver_config,
)
from secretref.errors import ResolverConfigError


class TestLoadResolverConfig:
    """Test locating and parsing the settings file."""

    def test_defaults_without_any_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_resolver_config()

        assert isinstance(config, ResolverConfigModel)
        assert config.user_secrets.id is None
        assert config.file.search_paths is None
        assert config.vault.enabled is False
        assert config.vault.token_env == "VAULT_TOKEN"
        assert config.vault.mount_point == "secret"
        assert config.vault.timeout == 30.0

    def test_explicit_path(self, tmp_path):
        config_file = tmp_path / "secretref.yaml"
        config_file.write_text(
            """
config:
  user_secrets:
    id: billing-api
  file:
    search_paths: ["/run/secrets"]
  vault:
    enabled: true
    dns_suffix: vault.example.com
    token_env: MY_VAULT_TOKEN
    mount_point: kv
    verify: /etc/ssl/ca.pem
    timeout: 5
"""
        )

        config = load_resolver_config(config_file)

        assert config.user_secrets.id == "billing-api"
        assert config.file.search_paths == ["/run/secrets"]
        assert config.vault == VaultConfigModel(
            enabled=True,
            dns_suffix="vault.example.com",
            token_env="MY_VAULT_TOKEN",
            mount_point="kv",
            verify="/etc/ssl/ca.pem",
            timeout=5,
        )

    def test_path_from_environment(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("config:\n  user_secrets:\n    id: from-env-file\n")
        monkeypatch.setenv("SECRETREF_CONFIG", str(config_file))

        assert load_resolver_config().user_secrets.id == "from-env-file"

    def test_home_file_is_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        home_config = tmp_path / "home" / ".secretref" / "config.yaml"
        home_config.parent.mkdir(parents=True)
        home_config.write_text("config:\n  user_secrets:\n    id: from-home\n")

        assert load_resolver_config().user_secrets.id == "from-home"

    def test_working_directory_file_is_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "secretref.yaml").write_text("config:\n  user_secrets:\n    id: from-cwd\n")

        assert load_resolver_config().user_secrets.id == "from-cwd"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_resolver_config(tmp_path / "missing.yaml")

    def test_empty_file_gives_defaults(self, tmp_path):
        config_file = tmp_path / "secretref.yaml"
        config_file.write_text("")

        assert load_resolver_config(config_file).vault.enabled is False

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "secretref.yaml"
        config_file.write_text("config: [unclosed")

        with pytest.raises(ResolverConfigError, match="Failed to parse YAML"):
            load_resolver_config(config_file)

    def test_non_mapping_file(self, tmp_path):
        config_file = tmp_path / "secretref.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ResolverConfigError, match="must contain a mapping"):
            load_resolver_config(config_file)


class TestBuildResolverConfig:
    """Test validation and defaults of the config section."""

    def test_unknown_field_is_rejected(self):
        with pytest.raises(ResolverConfigError, match="Invalid resolver config"):
            build_resolver_config({"vault": {"enabled": True, "adress": "typo"}})

    def test_non_positive_timeout_is_rejected(self):
        with pytest.raises(ResolverConfigError):
            build_resolver_config({"vault": {"timeout": 0}})

    def test_config_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            build_resolver_config({"unknown": {}})

    def test_user_secrets_id_from_environment(self, monkeypatch):
        monkeypatch.setenv("SECRETREF_USER_SECRETS_ID", "env-id")

        assert build_resolver_config({}).user_secrets.id == "env-id"
        assert build_resolver_config({"user_secrets": {"id": "explicit"}}).user_secrets.id == (
            "explicit"
        )

    def test_explicit_token_env_is_kept(self):
        config = build_resolver_config({"vault": {"token_env": "OTHER_TOKEN"}})

        assert config.vault.token_env == "OTHER_TOKEN"
