"""Resource state: a nested mapping of attribute values plus an identifier."""

from __future__ import annotations

import copy
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

_MISSING = object()


class ResourceData:
    """Attribute values of one resource, addressable by dotted paths such as "replications.0.url"."""

    def __init__(self, values: Mapping[str, Any] | None = None, id: str = "") -> None:
        self.values: dict[str, Any] = copy.deepcopy(dict(values or {}))
        self.id = id

    @staticmethod
    def _child(container: Any, part: str) -> Any:
        if isinstance(container, Mapping):
            return container.get(part, _MISSING)
        if isinstance(container, Sequence) and not isinstance(container, str) and part.isdigit():
            index = int(part)
            return container[index] if index < len(container) else _MISSING
        return _MISSING

    def _lookup(self, key: str) -> Any:
        current: Any = self.values
        for part in key.split("."):
            current = self._child(current, part)
            if current is _MISSING:
                break
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at a path, or the default when it is absent."""
        value = self._lookup(key)
        return default if value is _MISSING or value is None else value

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """Return the value and whether it is set to something other than its zero value."""
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return None, False
        return value, bool(value)

    def set(self, key: str, value: Any) -> None:
        """Store a value at a path; intermediate containers must already exist."""
        *parents, last = key.split(".")
        container: Any = self.values
        for part in parents:
            container = self._child(container, part)
            if container is _MISSING:
                raise KeyError(key)
        if isinstance(container, MutableMapping):
            container[last] = value
        elif isinstance(container, MutableSequence) and last.isdigit() and int(last) < len(container):
            container[int(last)] = value
        else:
            raise KeyError(key)

    def set_id(self, value: str) -> None:
        """Set the resource identifier; an empty string marks the resource as gone."""
        self.id = value