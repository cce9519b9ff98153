"""
Resolution chain.

This module provides the ResolverEngine class that turns configuration
strings into :class:`~secretref.secret.SecretString` results by asking each
resolver in a fixed order, and a lazily created process-wide default engine.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import ResolverConfigModel, build_resolver_config, load_resolver_config
from .errors import SecretNotFoundError, SecretNotResolvedError
from .references import SecretReference, parse_reference
from .resolvers import FileResolver, ResolverPlugin, UserSecretsResolver, VaultResolver
from .resolvers.vault import VaultClient
from .secret import SecretSource, SecretString
from .utils import run_sync

if TYPE_CHECKING:
    from .configuration import ResolvedConfiguration

logger = logging.getLogger(__name__)


class ResolverEngine:
    """
    Resolves secret references through an ordered list of resolvers.

    ## Resolution Order

    1. **User secrets** - developer overrides, local to one machine
    2. **Files** - ``<dir>/<vault>/<key>`` in the first existing secrets directory
    3. **Vault** - the remote vault, the authoritative source

    Resolvers run one after the other and the first value wins; later (and
    more expensive) resolvers are not called. Strings without the
    ``secret:`` prefix are returned verbatim without consulting any resolver.

    ## Usage Examples

    ```python
    engine = ResolverEngine.from_config_file("secretref.yaml")

    result = engine.resolve_text("secret:acme/db-pass")
    print(result)                     # secret:acme/db-pass Vault 3
    password = result.get_secret_value()

    # In async code
    result = await engine.resolve_text_async("secret:acme/db-pass")

    # Resolve a whole configuration tree on read
    settings = engine.wrap({"database": {"password": "secret:acme/db-pass"}})
    settings["database"]["password"]  # the secret value
    ```

    ## Error Handling

    - A malformed reference raises SecretFormatError before any resolver runs
    - No resolver having a value raises SecretNotFoundError
    - A resolver failing raises SecretNotResolvedError (or a subclass)

    Failures are never replaced by a placeholder value.
    """

    def __init__(
        self,
        resolver_config: ResolverConfigModel | None = None,
        resolvers: list[ResolverPlugin] | None = None,
        vault_client_factory: Callable[[], VaultClient] | None = None,
    ):
        """
        Initialize the ResolverEngine.

        Args:
            resolver_config: Optional resolver configuration. If None, uses default config.
            resolvers: Replaces the built-in resolver list (kept in the given order).
            vault_client_factory: Builds the vault client on first vault access.
                Defaults to an hvac client configured from ``resolver_config``.
        """
        self.resolver_config = resolver_config or build_resolver_config({})
        if resolvers is None:
            resolvers = [
                UserSecretsResolver(self.resolver_config.user_secrets),
                FileResolver(self.resolver_config.file),
                VaultResolver(self.resolver_config.vault, client_factory=vault_client_factory),
            ]
        self.resolvers = list(resolvers)
        logger.debug("Initialized resolvers: %s", ", ".join(self.list_resolvers()))

    @classmethod
    def from_config_file(cls, config_path: str | Path | None = None) -> ResolverEngine:
        """
        Create a ResolverEngine from a configuration file.

        Args:
            config_path: Path to the resolver configuration file.
                        If None, uses the default lookup of load_resolver_config.
        """
        return cls(load_resolver_config(Path(config_path) if config_path else None))

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> ResolverEngine:
        """
        Create a ResolverEngine from a configuration dictionary.

        Args:
            config_dict: Dictionary with a top-level ``config`` section
        """
        return cls(build_resolver_config(config_dict.get("config") or {}))

    def list_resolvers(self) -> list[str]:
        """List resolver names in resolution order."""
        return [resolver.name for resolver in self.resolvers]

    async def resolve_reference_async(self, reference: SecretReference) -> SecretString:
        """
        Resolve a parsed reference.

        Cancelling the awaiting task while the vault is queried cancels the
        query; no further resolver is tried.

        Raises:
            SecretNotFoundError: If no resolver has a value
            SecretNotResolvedError: If a resolver failed
        """
        for resolver in self.resolvers:
            try:
                result = await resolver.resolve_async(reference)
            except SecretNotResolvedError:
                raise
            except Exception as e:
                raise SecretNotResolvedError(
                    f"Failed to resolve secret {reference.key} from vault {reference.vault} "
                    f"({resolver.name} resolver)",
                    vault=reference.vault,
                    key=reference.key,
                ) from e

            if result is not None:
                logger.debug("Resolved %s", result)
                return result

        raise SecretNotFoundError(reference.vault, reference.key)

    async def resolve_text_async(self, text: str) -> SecretString:
        """
        Resolve a configuration string.

        Strings without the ``secret:`` prefix come back as verbatim results
        whose key and value are the string itself.

        Raises:
            SecretFormatError: If the string has the prefix but is malformed
            SecretNotResolvedError: If the reference cannot be resolved
        """
        reference = parse_reference(text)
        if reference is None:
            return SecretString(key=text, value=text, source=SecretSource.VERBATIM)
        return await self.resolve_reference_async(reference)

    def resolve_reference(self, reference: SecretReference) -> SecretString:
        """Blocking variant of resolve_reference_async, with no way to cancel."""
        return run_sync(self.resolve_reference_async(reference))

    def resolve_text(self, text: str) -> SecretString:
        """Blocking variant of resolve_text_async, with no way to cancel."""
        return run_sync(self.resolve_text_async(text))

    def wrap(self, config: Mapping[str, Any]) -> ResolvedConfiguration:
        """Return a read-only view of ``config`` that resolves every value on read."""
        from .configuration import ResolvedConfiguration

        return ResolvedConfiguration(config, engine=self)

    def cleanup(self) -> None:
        """Clean up all resolver resources."""
        for resolver in self.resolvers:
            try:
                resolver.cleanup()
            except Exception as e:
                logger.warning(f"Error cleaning up resolver {resolver.name}: {e}")

    def __enter__(self) -> ResolverEngine:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.cleanup()


_default_engine: ResolverEngine | None = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> ResolverEngine:
    """Return the process-wide engine, creating it from load_resolver_config() on first use."""
    global _default_engine
    engine = _default_engine
    if engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = ResolverEngine(load_resolver_config())
            engine = _default_engine
    return engine


def set_default_engine(engine: ResolverEngine | None) -> None:
    """Replace the process-wide engine. None resets it to lazy creation."""
    global _default_engine
    with _default_engine_lock:
        _default_engine = engine


def resolve(text: str) -> SecretString:
    """Resolve a configuration string with the default engine (blocking)."""
    return get_default_engine().resolve_text(text)


async def resolve_async(text: str) -> SecretString:
    """Resolve a configuration string with the default engine."""
    return await get_default_engine().resolve_text_async(text)


def resolve_configuration(config: Mapping[str, Any]) -> ResolvedConfiguration:
    """Wrap a configuration tree so every value is resolved by the default engine on read."""
    return get_default_engine().wrap(config)
