"""The result of resolving a secret.

A :class:`SecretString` carries the secret value together with the key used
to resolve it and where it came from. Converting it to text, printing it or
serializing it only ever exposes the key and the provenance:

```python
>>> result = SecretString(
...     key="secret:acme/db-pass",
...     value="p@ss",
...     source=SecretSource.VAULT,
...     identity="v3",
... )
>>> str(result)
'secret:acme/db-pass Vault v3'
>>> result.model_dump_json()
'"secret:acme/db-pass Vault v3"'
>>> result.get_secret_value()
'p@ss'
```
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import SecretStr, ValidationInfo, model_serializer, model_validator

from .models import SecretrefBaseModel


class SecretSource(str, Enum):
    """Where a resolved value came from."""

    VERBATIM = "Verbatim"
    USER_OVERRIDE = "UserOverride"
    FILE = "File"
    VAULT = "Vault"


class SecretString(SecretrefBaseModel):
    """A resolved configuration value with its provenance.

    Attributes:
        key: The original value from the configuration. Never secret.
        value: The resolved value, masked in every rendering.
        source: Which resolver produced the value.
        identity: User-secrets id, file timestamp or vault version.
    """

    key: str
    value: SecretStr
    source: SecretSource = SecretSource.VERBATIM
    identity: str = ""

    @model_validator(mode="before")
    @classmethod
    def _reject_serialized_form(cls, data: Any, info: ValidationInfo) -> Any:
        # The serialized form is the provenance string; the value is gone.
        if info.mode == "json" or isinstance(data, str):
            raise ValueError("Cannot deserialize a SecretString: only its provenance was serialized")
        return data

    @classmethod
    def model_validate_json(cls, *args: Any, **kwargs: Any) -> SecretString:
        raise NotImplementedError("Cannot deserialize a SecretString from JSON.")

    @model_serializer
    def _serialize(self) -> str:
        return str(self)

    def get_secret_value(self) -> str:
        """Return the plain secret value."""
        return self.value.get_secret_value()

    @property
    def is_verbatim(self) -> bool:
        return self.source is SecretSource.VERBATIM

    def __str__(self) -> str:
        if self.is_verbatim:
            return self.key
        return f"{self.key} {self.source.value} {self.identity}"

    def __repr__(self) -> str:
        return f"SecretString({str(self)!r})"
