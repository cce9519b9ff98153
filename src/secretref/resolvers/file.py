"""
File resolver.

This module provides the FileResolver class for secrets mounted on the file
system as ``<dir>/<vault>/<key>``.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from secretref.config.models import FileSecretsConfigModel
from secretref.references import SecretReference
from secretref.secret import SecretSource, SecretString

from .base import ResolverPlugin

logger = logging.getLogger(__name__)

WINDOWS_SECRETS_DIR = r"C:\ProgramData\secretref\secrets"
UNIX_SECRETS_DIR = "/etc/secretref/secrets"


def default_search_paths() -> list[Path]:
    """The working directory's ``secrets`` folder, then machine-wide locations."""
    return [Path.cwd() / "secrets", Path(WINDOWS_SECRETS_DIR), Path(UNIX_SECRETS_DIR)]


class FileResolver(ResolverPlugin):
    """Resolver for secrets stored as plain text files.

    Only the first search directory that exists is consulted: a missing file
    there means no value, even if a later directory holds one.
    """

    source = SecretSource.FILE

    def __init__(self, config: FileSecretsConfigModel | None = None):
        self.config = config or FileSecretsConfigModel()

    @property
    def name(self) -> str:
        return "file"

    @property
    def search_paths(self) -> list[Path]:
        if self.config.search_paths is not None:
            return [Path(p).expanduser() for p in self.config.search_paths]
        return default_search_paths()

    def resolve(self, reference: SecretReference) -> SecretString | None:
        for directory in self.search_paths:
            if not directory.is_dir():
                continue

            file_path = directory / reference.vault / reference.key
            try:
                value = file_path.read_text(encoding="utf-8").strip()
                modified = datetime.fromtimestamp(file_path.stat().st_mtime, tz=timezone.utc)
            except FileNotFoundError:
                logger.debug("No secret file for %s in %s", reference, directory)
                return None
            except Exception as e:
                logger.debug("Ignoring unreadable secret file for %s (%s)", reference, type(e).__name__)
                return None

            logger.debug("Resolved %s from secrets directory %s", reference, directory)
            return self.make_result(reference, value, identity=modified.isoformat())

        return None
