"""Base Pydantic model for secretref.

Every model in the package inherits from :class:`SecretrefBaseModel` so that
they share one configuration:

- Strict field validation (no extra fields allowed)
- Immutable instances, safe to share between threads and event loops

Example:
    >>> from secretref.models import SecretrefBaseModel
    >>>
    >>> class Endpoint(SecretrefBaseModel):
    ...     url: str
    >>>
    >>> Endpoint(url="https://acme.vault.example.com/").model_dump()
    {'url': 'https://acme.vault.example.com/'}
"""

from pydantic import BaseModel, ConfigDict


class SecretrefBaseModel(BaseModel):
    """Base model for all secretref Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
