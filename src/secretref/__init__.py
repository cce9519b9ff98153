"""secretref - resolve ``secret:<vault>/<key>`` references in configuration.

Configuration values of the form ``secret:<vault>/<key>`` are resolved, in
order, from developer user secrets, from secret files mounted on the machine,
and from a remote vault. Anything else is used verbatim.

## Quick Start

```python
import secretref

result = secretref.resolve("secret:acme/db-pass")
print(result)                       # secret:acme/db-pass File 2024-05-01T09:12:44+00:00
password = result.get_secret_value()

settings = secretref.resolve_configuration(yaml.safe_load(open("app.yaml")))
settings["database"]["password"]    # resolved on every read
```

Resolved values never appear in ``str()``, ``repr()``, logs or serialized
output; only the reference and where its value came from do.

## Module Exports

- **ResolverEngine**: the resolution chain
- **ResolvedConfiguration**: read-only resolving view over a configuration tree
- **SecretString**, **SecretSource**: resolution results
- **SecretReference**, **parse_reference**, **find_references**: reference syntax
- **resolve**, **resolve_async**, **resolve_configuration**: shortcuts using the
  process-wide default engine
- Errors: **SecretError** and its subclasses
"""

from .config import ResolverConfigModel, load_resolver_config
from .configuration import ResolvedConfiguration
from .engine import (
    ResolverEngine,
    get_default_engine,
    resolve,
    resolve_async,
    resolve_configuration,
    set_default_engine,
)
from .errors import (
    ReadOnlyConfigurationError,
    ResolverConfigError,
    SecretError,
    SecretFormatError,
    SecretNotFoundError,
    SecretNotResolvedError,
    VaultAccessError,
    VaultConfigurationError,
    VaultEmptyValueError,
)
from .references import SecretReference, find_references, is_secret_reference, parse_reference
from .secret import SecretSource, SecretString
from .version import PACKAGE_NAME, PACKAGE_VERSION

__all__ = [
    # Core classes
    "ResolverEngine",
    "ResolvedConfiguration",
    "SecretString",
    "SecretSource",
    "SecretReference",
    # Configuration
    "ResolverConfigModel",
    "load_resolver_config",
    # Functions
    "parse_reference",
    "is_secret_reference",
    "find_references",
    "resolve",
    "resolve_async",
    "resolve_configuration",
    "get_default_engine",
    "set_default_engine",
    # Errors
    "SecretError",
    "SecretFormatError",
    "SecretNotResolvedError",
    "SecretNotFoundError",
    "VaultAccessError",
    "VaultEmptyValueError",
    "VaultConfigurationError",
    "ReadOnlyConfigurationError",
    "ResolverConfigError",
    # Version
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
]
