"""
Vault resolver.

This module provides the VaultResolver class for resolving references against
HashiCorp Vault. The vault segment of ``secret:<vault>/<key>`` selects the
server ``https://<vault>.<dns_suffix>/`` and the key names a KV v2 secret.

The resolver talks to Vault through the small :class:`VaultClient` protocol so
tests (or other secret stores) can stand in for the default
:class:`HvacVaultClient`.
"""

import asyncio
import logging
import os
import threading
from collections.abc import Callable
from functools import partial
from typing import Any, Protocol

import hvac
from pydantic import SecretStr

from secretref.config.models import VaultConfigModel
from secretref.errors import VaultAccessError, VaultConfigurationError, VaultEmptyValueError
from secretref.models import SecretrefBaseModel
from secretref.references import SecretReference
from secretref.secret import SecretSource, SecretString
from secretref.utils import run_sync

from .base import ResolverPlugin

logger = logging.getLogger(__name__)


class VaultSecretBundle(SecretrefBaseModel):
    """A secret as returned by a vault.

    Attributes:
        value: The secret value, or None if the vault holds no value for it
        id: Resource identifier whose last path segment is the version
    """

    value: SecretStr | None
    id: str


class VaultClient(Protocol):
    """Asynchronous key-value access to vaults addressed by URL."""

    async def get_secret(self, vault_url: str, name: str) -> VaultSecretBundle: ...


class HvacVaultClient:
    """VaultClient backed by ``hvac``, reading KV v2 secrets.

    One ``hvac.Client`` is kept per vault URL. Calls to hvac are blocking and
    run on a worker thread.
    """

    def __init__(
        self,
        token: str,
        mount_point: str = "secret",
        field: str = "value",
        verify: bool | str = True,
        timeout: float | None = None,
    ):
        self._token = token
        self._mount_point = mount_point
        self._field = field
        self._verify = verify
        self._timeout = timeout
        self._clients: dict[str, hvac.Client] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: VaultConfigModel) -> "HvacVaultClient":
        """Create a client using the token named by ``config.token_env``.

        Raises:
            VaultConfigurationError: If the token environment variable is unset
        """
        token_env = config.token_env or "VAULT_TOKEN"
        token = os.environ.get(token_env)
        if not token:
            raise VaultConfigurationError(f"Vault token not found in environment variable '{token_env}'")

        return cls(
            token,
            mount_point=config.mount_point,
            field=config.field,
            verify=config.verify,
            timeout=config.timeout,
        )

    def _client_for(self, vault_url: str) -> hvac.Client:
        with self._lock:
            client = self._clients.get(vault_url)
            if client is None:
                kwargs: dict[str, Any] = {"url": vault_url, "token": self._token, "verify": self._verify}
                if self._timeout is not None:
                    kwargs["timeout"] = self._timeout
                client = hvac.Client(**kwargs)
                self._clients[vault_url] = client
            return client

    def _read_secret(self, vault_url: str, name: str) -> VaultSecretBundle:
        client = self._client_for(vault_url)
        response = client.secrets.kv.v2.read_secret_version(
            path=name,
            mount_point=self._mount_point,
            raise_on_deleted_version=True,
        )

        data = response["data"]
        value = (data.get("data") or {}).get(self._field)
        version = (data.get("metadata") or {}).get("version")

        return VaultSecretBundle(
            value=None if value is None else str(value),
            id=f"{vault_url.rstrip('/')}/secrets/{name}/{version}",
        )

    async def get_secret(self, vault_url: str, name: str) -> VaultSecretBundle:
        return await asyncio.to_thread(self._read_secret, vault_url, name)

    def close(self) -> None:
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            client.adapter.close()


class VaultClientProvider:
    """Builds the vault client on first use and hands out the same one afterwards.

    A failed construction is raised to the caller and attempted again on the
    next call.
    """

    def __init__(self, factory: Callable[[], VaultClient]):
        self._factory = factory
        self._client: VaultClient | None = None
        self._lock = threading.Lock()

    @property
    def created(self) -> bool:
        return self._client is not None

    def get(self) -> VaultClient:
        client = self._client
        if client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._factory()
                    logger.debug("Vault client created")
                client = self._client
        return client

    def close(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        close = getattr(client, "close", None)
        if close is not None:
            close()


class VaultResolver(ResolverPlugin):
    """Resolver for secrets held in a remote vault.

    This is the last resolver in the chain and the one reporting failures:
    transport, authentication and timeout errors raise VaultAccessError, and
    a secret without a value raises VaultEmptyValueError.
    """

    source = SecretSource.VAULT

    def __init__(
        self,
        config: VaultConfigModel | None = None,
        client_factory: Callable[[], VaultClient] | None = None,
    ):
        self.config = config or VaultConfigModel()
        factory = client_factory or partial(HvacVaultClient.from_config, self.config)
        self._client_provider = VaultClientProvider(factory)

    @property
    def name(self) -> str:
        return "vault"

    @property
    def client_provider(self) -> VaultClientProvider:
        return self._client_provider

    def validate_config(self) -> bool:
        return self.config.enabled and bool(self.config.dns_suffix)

    def vault_url(self, vault: str) -> str:
        return f"https://{vault}.{self.config.dns_suffix}/"

    def resolve(self, reference: SecretReference) -> SecretString | None:
        return run_sync(self.resolve_async(reference))

    async def resolve_async(self, reference: SecretReference) -> SecretString | None:
        if not self.validate_config():
            logger.debug("Vault is not configured, skipping %s", reference)
            return None

        url = self.vault_url(reference.vault)
        try:
            client = self._client_provider.get()
            fetch = client.get_secret(url, reference.key)
            if self.config.timeout is not None:
                bundle = await asyncio.wait_for(fetch, timeout=self.config.timeout)
            else:
                bundle = await fetch
        except Exception as e:
            logger.warning(
                "Failed to retrieve secret %s from %s (%s)", reference.key, url, type(e).__name__
            )
            raise VaultAccessError(reference.vault, reference.key, url) from e

        if bundle.value is None:
            raise VaultEmptyValueError(reference.vault, reference.key, url)

        # The version is the last segment of the secret identifier
        identity = bundle.id.rsplit("/", 1)[-1]

        logger.debug("Resolved %s from vault, version %s", reference, identity)
        return self.make_result(reference, bundle.value.get_secret_value(), identity=identity)

    def cleanup(self) -> None:
        self._client_provider.close()
