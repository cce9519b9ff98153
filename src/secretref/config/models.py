"""Pydantic models for resolver configuration.

This module defines the settings consumed by the built-in resolvers
(user secrets, file system and vault).
"""

from pydantic import Field

from secretref.models import SecretrefBaseModel


class UserSecretsConfigModel(SecretrefBaseModel):
    """Configuration for developer-local user secrets.

    Attributes:
        id: Identifier of the application's user-secrets store. Without it,
            user secrets are never consulted.
        root: Directory holding one sub-directory per user-secrets id.
            Defaults to a per-user location.

    Example:
        >>> config = UserSecretsConfigModel(id="billing-api")
    """

    id: str | None = None
    root: str | None = None


class FileSecretsConfigModel(SecretrefBaseModel):
    """Configuration for secrets mounted on the file system.

    Attributes:
        search_paths: Directories to search, in order. Only the first one
            that exists is consulted. Defaults to ``./secrets`` then the
            machine-wide Windows and Unix locations.
    """

    search_paths: list[str] | None = None


class VaultConfigModel(SecretrefBaseModel):
    """Configuration for HashiCorp Vault integration.

    Each reference ``secret:<vault>/<key>`` is read from the Vault server at
    ``https://<vault>.<dns_suffix>/``. The token is read from an environment
    variable for security.

    Attributes:
        enabled: Whether Vault integration is enabled
        dns_suffix: Domain appended to the vault name to build its address
        token_env: Environment variable name containing the Vault token
        mount_point: KV v2 secrets engine mount point
        field: Field of the KV secret holding the value
        verify: TLS verification flag or path to a CA bundle
        timeout: Seconds to wait for Vault before giving up

    Example:
        >>> config = VaultConfigModel(
        ...     enabled=True,
        ...     dns_suffix="vault.example.com",
        ...     token_env="VAULT_TOKEN"
        ... )
    """

    enabled: bool = False
    dns_suffix: str | None = None
    token_env: str | None = None
    mount_point: str = "secret"
    field: str = "value"
    verify: bool | str = True
    timeout: float | None = Field(default=30.0, gt=0)


class ResolverConfigModel(SecretrefBaseModel):
    """Root configuration for all resolvers.

    This is the structure of the resolver configuration that can be loaded
    from a YAML file:

    ```yaml
    config:
      user_secrets:
        id: "billing-api"
      file:
        search_paths: ["./secrets"]
      vault:
        enabled: true
        dns_suffix: "vault.example.com"
        token_env: "VAULT_TOKEN"
    ```
    """

    user_secrets: UserSecretsConfigModel = Field(default_factory=UserSecretsConfigModel)
    file: FileSecretsConfigModel = Field(default_factory=FileSecretsConfigModel)
    vault: VaultConfigModel = Field(default_factory=VaultConfigModel)
