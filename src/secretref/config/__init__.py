"""Resolver settings: models and the YAML loader."""

from .loader import build_resolver_config, load_resolver_config
from .models import (
    FileSecretsConfigModel,
    ResolverConfigModel,
    UserSecretsConfigModel,
    VaultConfigModel,
)

__all__ = [
    "FileSecretsConfigModel",
    "ResolverConfigModel",
    "UserSecretsConfigModel",
    "VaultConfigModel",
    "build_resolver_config",
    "load_resolver_config",
]
