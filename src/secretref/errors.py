"""Exceptions raised while resolving secret references.

Error Hierarchy:
    SecretError
    ├── SecretFormatError          (also a ValueError)
    ├── SecretNotResolvedError
    │   ├── SecretNotFoundError
    │   ├── VaultAccessError
    │   └── VaultEmptyValueError
    ├── VaultConfigurationError
    ├── ReadOnlyConfigurationError (also a TypeError)
    └── ResolverConfigError        (also a ValueError)

Messages only ever mention the vault name, the secret key and the vault URL.
They never contain a resolved value, and a malformed reference is never
echoed back because it may be a real secret that merely looks like one.
"""

from __future__ import annotations


class SecretError(Exception):
    """Base class for every error raised by secretref."""


class SecretFormatError(SecretError, ValueError):
    """A string starts with ``secret:`` but is not a valid reference.

    Attributes:
        reason: Which rule the reference broke, without quoting it
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Entry starts with 'secret:' but is not in proper 'vault/key' format: {reason}"
        )


class SecretNotResolvedError(SecretError):
    """A well-formed reference could not be turned into a value.

    Attributes:
        vault: Vault segment of the reference
        key: Key segment of the reference
    """

    def __init__(self, message: str, vault: str, key: str):
        self.vault = vault
        self.key = key
        super().__init__(message)


class SecretNotFoundError(SecretNotResolvedError):
    """No resolver had a value for the reference."""

    def __init__(self, vault: str, key: str):
        super().__init__(
            f"Secret {key} from vault {vault} was not found by any resolver",
            vault=vault,
            key=key,
        )


class VaultAccessError(SecretNotResolvedError):
    """The vault could not be reached, refused access, or timed out.

    The underlying exception is available as ``__cause__``.
    """

    def __init__(self, vault: str, key: str, url: str):
        self.url = url
        super().__init__(
            f"Failed to retrieve secret {key} from {url}",
            vault=vault,
            key=key,
        )


class VaultEmptyValueError(SecretNotResolvedError):
    """The vault answered but the secret carries no value."""

    def __init__(self, vault: str, key: str, url: str):
        self.url = url
        super().__init__(
            f"Secret {key} from {url} has no associated value",
            vault=vault,
            key=key,
        )


class VaultConfigurationError(SecretError):
    """The vault client cannot be built from the current settings."""


class ReadOnlyConfigurationError(SecretError, TypeError):
    """A write was attempted through a resolved configuration view."""


class ResolverConfigError(SecretError, ValueError):
    """The resolver settings file could not be read or is invalid."""
