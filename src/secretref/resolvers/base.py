"""
Base class for resolver implementations.

A resolver is one ordered source of truth for secret references. The
:class:`~secretref.engine.ResolverEngine` asks each resolver in turn and keeps
the first answer.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from secretref.references import SecretReference
from secretref.secret import SecretSource, SecretString

logger = logging.getLogger(__name__)


class ResolverPlugin(ABC):
    """
    Abstract base class for secret resolvers.

    ## Contract

    `resolve` (and its suspendable twin `resolve_async`) returns:

    - a `SecretString` when the resolver found a value,
    - `None` when it has no opinion and the next resolver should be asked,
    - or raises when it attempted resolution and failed.

    Local resolvers turn every failure into `None` so that the remote vault
    stays the one reporting real failures.

    ## Implementation Example

    ```python
    class StaticResolver(ResolverPlugin):
        '''Resolver answering from an in-memory mapping, e.g. in tests'''

        source = SecretSource.USER_OVERRIDE

        def __init__(self, values: dict[str, str]):
            self.values = values

        @property
        def name(self) -> str:
            return "static"

        def resolve(self, reference: SecretReference) -> SecretString | None:
            value = self.values.get(f"{reference.vault}/{reference.key}")
            if value is None:
                return None
            return self.make_result(reference, value, identity="static")
    ```

    ## Resource Management

    Resolvers creating external clients should create them lazily and
    release them in `cleanup()`, which must be idempotent.
    """

    source: SecretSource

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this resolver."""

    @abstractmethod
    def resolve(self, reference: SecretReference) -> SecretString | None:
        """Resolve the reference, or return None if this resolver has no value."""

    async def resolve_async(self, reference: SecretReference) -> SecretString | None:
        """Suspendable variant of `resolve`. Local resolvers keep this default."""
        return self.resolve(reference)

    def make_result(self, reference: SecretReference, value: str, identity: str) -> SecretString:
        return SecretString(
            key=reference.text,
            value=value,
            source=self.source,
            identity=identity,
        )

    def cleanup(self) -> None:
        """
        Clean up any resources (clients, connections, etc.) used by this resolver.
        This method should be idempotent - safe to call multiple times.
        """

    def __enter__(self) -> "ResolverPlugin":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.cleanup()
