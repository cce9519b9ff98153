"""Configuration loader for resolver configuration.

This module provides functions to load and validate resolver configuration
from a YAML file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from secretref.errors import ResolverConfigError

from .models import ResolverConfigModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SECRETREF_CONFIG"
USER_SECRETS_ID_ENV_VAR = "SECRETREF_USER_SECRETS_ID"
DEFAULT_VAULT_TOKEN_ENV = "VAULT_TOKEN"


def load_resolver_config(config_path: Path | None = None) -> ResolverConfigModel:
    """Load resolver configuration from a YAML file.

    Args:
        config_path: Optional path to the configuration file.
                    If not provided, looks for:
                    1. SECRETREF_CONFIG environment variable
                    2. ~/.secretref/config.yaml
                    3. ./secretref.yaml

    Returns:
        ResolverConfigModel with resolver settings

    Raises:
        FileNotFoundError: If an explicitly requested file doesn't exist
        ResolverConfigError: If the file is not valid YAML or fails validation
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            config_path = Path(env_path)
        else:
            candidates = [Path.home() / ".secretref" / "config.yaml", Path.cwd() / "secretref.yaml"]
            for candidate in candidates:
                if candidate.exists():
                    config_path = candidate
                    break

            if config_path is None:
                logger.info("No resolver config file found, using default configuration")
                return _apply_defaults(ResolverConfigModel())

    if not config_path.exists():
        raise FileNotFoundError(f"Resolver config file not found at {config_path}")

    logger.debug("Loading resolver config from: %s", config_path)

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ResolverConfigError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        logger.info("Empty resolver config file, using default configuration")
        return _apply_defaults(ResolverConfigModel())

    if not isinstance(raw_config, dict):
        raise ResolverConfigError(f"Resolver config file {config_path} must contain a mapping")

    return build_resolver_config(raw_config.get("config") or {})


def build_resolver_config(config_section: dict[str, Any]) -> ResolverConfigModel:
    """Build a ResolverConfigModel from the ``config`` section of a settings file.

    Args:
        config_section: The 'config' section as a dictionary

    Returns:
        Validated ResolverConfigModel with defaults applied

    Raises:
        ResolverConfigError: If validation fails
    """
    try:
        resolver_config = ResolverConfigModel.model_validate(config_section)
    except ValidationError as e:
        raise ResolverConfigError(f"Invalid resolver config: {e}") from e

    return _apply_defaults(resolver_config)


def _apply_defaults(config: ResolverConfigModel) -> ResolverConfigModel:
    """Apply default values to resolver configuration.

    Since the models are frozen, copies are returned with defaults applied.
    """
    user_secrets = config.user_secrets
    vault = config.vault

    if user_secrets.id is None:
        env_id = os.environ.get(USER_SECRETS_ID_ENV_VAR)
        if env_id:
            user_secrets = user_secrets.model_copy(update={"id": env_id})

    if vault.token_env is None:
        vault = vault.model_copy(update={"token_env": DEFAULT_VAULT_TOKEN_ENV})

    return config.model_copy(update={"user_secrets": user_secrets, "vault": vault})
