"""
User secrets resolver.

This module provides the UserSecretsResolver class, which lets a developer
override any reference locally without touching shared configuration.
The store is a JSON object kept outside the project tree:

    <root>/<user-secrets-id>/secrets.json

    {
        "acme/db-pass": "local-password"
    }
"""

import json
import logging
import os
from pathlib import Path

from secretref.config.models import UserSecretsConfigModel
from secretref.references import SecretReference
from secretref.secret import SecretSource, SecretString

from .base import ResolverPlugin

logger = logging.getLogger(__name__)

SECRETS_FILE_NAME = "secrets.json"


def default_user_secrets_root() -> Path:
    """Per-user directory holding one user-secrets store per application."""
    appdata = os.environ.get("APPDATA")
    if os.name == "nt" and appdata:
        return Path(appdata) / "secretref" / "UserSecrets"
    return Path.home() / ".secretref" / "usersecrets"


class UserSecretsResolver(ResolverPlugin):
    """Resolver for developer overrides named '{vault}/{key}'."""

    source = SecretSource.USER_OVERRIDE

    def __init__(self, config: UserSecretsConfigModel | None = None):
        self.config = config or UserSecretsConfigModel()

    @property
    def name(self) -> str:
        return "user_secrets"

    @property
    def secrets_path(self) -> Path | None:
        """Location of the store, or None when no user-secrets id is configured."""
        if not self.config.id:
            return None
        root = Path(self.config.root).expanduser() if self.config.root else default_user_secrets_root()
        return root / self.config.id / SECRETS_FILE_NAME

    def resolve(self, reference: SecretReference) -> SecretString | None:
        secrets_path = self.secrets_path
        if secrets_path is None:
            return None

        entry = f"{reference.vault}/{reference.key}"
        try:
            with open(secrets_path, encoding="utf-8") as f:
                store = json.load(f)
            value = store.get(entry) if isinstance(store, dict) else None
        except FileNotFoundError:
            return None
        except Exception as e:
            # Broken local state must not hide the authoritative vault answer
            logger.debug("Ignoring unreadable user secrets store (%s)", type(e).__name__)
            return None

        if value is None or isinstance(value, (dict, list)):
            return None

        logger.debug("Resolved %s from user secrets %s", reference, self.config.id)
        return self.make_result(reference, str(value), identity=self.config.id or "")
