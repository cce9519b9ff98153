"""
Resolvers subpackage.

This subpackage contains the resolver implementations, in the order the
engine consults them: user secrets, file system, vault.
"""

from .base import ResolverPlugin
from .file import FileResolver
from .user_secrets import UserSecretsResolver
from .vault import (
    HvacVaultClient,
    VaultClient,
    VaultClientProvider,
    VaultResolver,
    VaultSecretBundle,
)

__all__ = [
    "ResolverPlugin",
    "UserSecretsResolver",
    "FileResolver",
    "VaultResolver",
    "VaultClient",
    "VaultClientProvider",
    "VaultSecretBundle",
    "HvacVaultClient",
]
