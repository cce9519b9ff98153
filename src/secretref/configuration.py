"""
Read-only configuration view that resolves secret references on read.

``ResolvedConfiguration`` wraps a configuration tree built elsewhere (any
``Mapping``, typically a dict loaded from YAML or JSON). It keeps a reference
to the tree rather than a copy, so later changes to the tree are visible
through the view, and nothing is cached: every read goes through the engine.

```python
settings = ResolvedConfiguration(
    {"database": {"host": "db.internal", "password": "secret:acme/db-pass"}}
)
settings["database"]["host"]      # 'db.internal'
settings["database"]["password"]  # the resolved secret
settings["database"]["password"] = "x"  # ReadOnlyConfigurationError
```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from .engine import ResolverEngine, get_default_engine
from .errors import ReadOnlyConfigurationError

_EMPTY: Mapping[str, Any] = {}


class ResolvedConfiguration(Mapping[str, Any]):
    """A read-only, resolving view over one node of a configuration tree.

    Values read through the view follow these rules:

    - non-empty strings are resolved and only the secret value is returned
    - nested mappings come back as ResolvedConfiguration themselves
    - lists and tuples come back as tuples whose items follow the same rules
    - anything else (numbers, booleans, None, empty strings) is returned as is

    Sections obtained from a view look their node up in the parent on every
    read, so a section that is missing now, or replaced later, reflects the
    tree as it is at read time. While the key is missing or holds a plain
    value the section is empty.

    Resolution errors propagate to the reader, including through ``get``.
    """

    def __init__(
        self,
        wrapped: Mapping[str, Any] | None,
        engine: ResolverEngine | None = None,
        path: str = "",
        *,
        parent: ResolvedConfiguration | None = None,
        key: str | None = None,
    ):
        if wrapped is None and parent is None:
            raise ValueError("Cannot wrap a missing configuration")
        self._wrapped = wrapped
        self._engine = engine
        self._path = path
        self._parent = parent
        self._key = path if key is None else key

    @property
    def engine(self) -> ResolverEngine:
        return self._engine or get_default_engine()

    @property
    def key(self) -> str:
        """Name of this node within its parent (for a root, its path)."""
        return self._key

    @property
    def path(self) -> str:
        """Dot-separated path of this node from the root."""
        return self._path

    @property
    def _node(self) -> Mapping[str, Any]:
        if self._parent is None:
            return self._wrapped  # type: ignore[return-value]
        value = self._parent._node.get(self._key, _EMPTY)
        return value if isinstance(value, Mapping) else _EMPTY

    def _child_path(self, key: Any) -> str:
        return f"{self._path}.{key}" if self._path else str(key)

    def _section(self, key: str) -> ResolvedConfiguration:
        return ResolvedConfiguration(
            None, engine=self._engine, path=self._child_path(key), parent=self, key=key
        )

    def _resolve(self, value: Any, path: str, key: str) -> Any:
        if isinstance(value, str):
            if not value:
                return value
            return self.engine.resolve_text(value).get_secret_value()
        if isinstance(value, Mapping):
            return ResolvedConfiguration(value, engine=self._engine, path=path, key=key)
        if isinstance(value, (list, tuple)):
            return tuple(
                self._resolve(item, f"{path}.{i}", str(i)) for i, item in enumerate(value)
            )
        return value

    def __getitem__(self, key: str) -> Any:
        value = self._node[key]
        if isinstance(value, Mapping):
            return self._section(key)
        return self._resolve(value, self._child_path(key), key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._node)

    def __len__(self) -> int:
        return len(self._node)

    def __contains__(self, key: object) -> bool:
        return key in self._node

    def section(self, key: str) -> ResolvedConfiguration:
        """Return the child section ``key``; an empty section if it does not exist yet.

        Only mappings are sections. List items are reachable through
        ``self[key]``, which returns them as a tuple.

        Raises:
            TypeError: If ``key`` currently holds a value rather than a section
        """
        value = self._node.get(key)
        if value is not None and not isinstance(value, Mapping):
            raise TypeError(f"Configuration entry {self._child_path(key)} is not a section")
        return self._section(key)

    def children(self) -> list[ResolvedConfiguration]:
        """Return every mapping-valued child section, in iteration order.

        Lists and plain values are not sections and are left out.
        """
        return [
            self._section(key)
            for key, value in self._node.items()
            if isinstance(value, Mapping)
        ]

    def subscribe(self, callback: Callable[[], None]) -> Any:
        """Register ``callback`` for changes of the wrapped tree.

        The call is handed to the wrapped tree unchanged, and so is its return
        value (typically a way to unsubscribe).

        Raises:
            TypeError: If the wrapped tree does not support change notification
        """
        node = self._node
        subscribe = getattr(node, "subscribe", None)
        if subscribe is None:
            raise TypeError(f"{type(node).__name__} does not support change notification")
        return subscribe(callback)

    def __setitem__(self, key: str, value: Any) -> None:
        raise ReadOnlyConfigurationError(
            f"Cannot set {self._child_path(key)}: resolved configuration is read-only"
        )

    def __delitem__(self, key: str) -> None:
        raise ReadOnlyConfigurationError(
            f"Cannot delete {self._child_path(key)}: resolved configuration is read-only"
        )

    def __repr__(self) -> str:
        return f"ResolvedConfiguration(path={self._path!r}, keys={list(self._node)!r})"
