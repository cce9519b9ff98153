"""
Secret reference syntax.

This module is the single source of truth for:
- The ``secret:<vault>/<key>`` reference format
- Parsing and validating references
- Locating references inside a configuration structure
"""

from __future__ import annotations

import re
from typing import Any

from .errors import SecretFormatError
from .models import SecretrefBaseModel

SECRET_PREFIX = "secret:"

MAX_VAULT_LENGTH = 24
MAX_KEY_LENGTH = 127

SEGMENT_PATTERN = re.compile(r"[0-9a-zA-Z\-]+")


class SecretReference(SecretrefBaseModel):
    """A validated ``secret:<vault>/<key>`` reference.

    Only build one through :func:`parse_reference`, which enforces the
    charset and length rules.
    """

    vault: str
    key: str

    @property
    def text(self) -> str:
        """The reference as written in configuration."""
        return f"{SECRET_PREFIX}{self.vault}/{self.key}"

    def __str__(self) -> str:
        return self.text


def is_secret_reference(value: Any) -> bool:
    """Check if a value claims to be a secret reference (valid or not)."""
    return isinstance(value, str) and value.startswith(SECRET_PREFIX)


def parse_reference(text: str) -> SecretReference | None:
    """Parse a configuration string into a secret reference.

    Args:
        text: Raw configuration value

    Returns:
        The parsed reference, or None if ``text`` does not start with
        ``secret:`` and must be used as is.

    Raises:
        SecretFormatError: If ``text`` has the prefix but is malformed. The
            error never includes ``text``, which may be a misplaced secret.
    """
    if not text.startswith(SECRET_PREFIX):
        return None

    segments = text[len(SECRET_PREFIX) :].split("/")
    if len(segments) != 2:
        raise SecretFormatError(f"expected exactly one '/' separator, found {len(segments) - 1}")

    vault, key = segments
    _check_segment("vault", vault, MAX_VAULT_LENGTH)
    _check_segment("key", key, MAX_KEY_LENGTH)

    return SecretReference(vault=vault, key=key)


def _check_segment(name: str, segment: str, max_length: int) -> None:
    if not segment:
        raise SecretFormatError(f"{name} segment is empty")
    if len(segment) > max_length:
        raise SecretFormatError(f"{name} segment exceeds {max_length} characters")
    if SEGMENT_PATTERN.fullmatch(segment) is None:
        raise SecretFormatError(f"{name} segment may only contain letters, digits and '-'")


def find_references(
    config: Any, path: list[str | int] | None = None
) -> list[tuple[list[str | int], str]]:
    """Find all secret references in a configuration structure.

    References are reported as written; they are neither validated nor
    resolved.

    Args:
        config: Configuration to scan (mappings, lists and scalars)
        path: Current path in the configuration (for internal use)

    Returns:
        List of (path, reference text) tuples
    """
    refs: list[tuple[list[str | int], str]] = []
    path = path or []

    if is_secret_reference(config):
        refs.append((path, config))
    elif isinstance(config, dict):
        for key, value in config.items():
            refs.extend(find_references(value, path + [key]))
    elif isinstance(config, (list, tuple)):
        for i, item in enumerate(config):
            refs.extend(find_references(item, path + [i]))

    return refs
