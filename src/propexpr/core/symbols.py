"""
Symbol contexts: named values that expressions can reference.

A host application exposes its properties (configuration entries,
scene-graph attributes, ...) by implementing ``SymbolContext``. The
evaluator depends only on this interface and only ever reads.

Usage:
    from propexpr.core.symbols import PropertyMap

    ctx = PropertyMap({"FOO": 2})
    ctx.read("FOO")  # Integer(value=2)
    ctx.read("Foo")  # Absent()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from propexpr.core.errors import SymbolWriteError
from propexpr.core.ir.values import ABSENT, Value, from_python

logger = logging.getLogger(__name__)


class SymbolContext(ABC):
    """Read/write access to named values by string key."""

    @abstractmethod
    def names(self) -> list[str]:
        """Names of all known symbols."""

    @abstractmethod
    def read(self, name: str) -> Value:
        """Value stored under ``name``, or Absent if unknown."""

    @abstractmethod
    def write(self, name: str, value: Value) -> None:
        """Store ``value`` under ``name``."""


class PropertyMap(SymbolContext):
    """In-memory symbol context backed by a dict.

    Names are case-sensitive. Native Python values are accepted on write
    and converted with ``from_python``.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Value] = {}
        for name, value in (values or {}).items():
            self.write(name, value)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> PropertyMap:
        return cls(values)

    def names(self) -> list[str]:
        return list(self._values)

    def read(self, name: str) -> Value:
        value = self._values.get(name)
        if value is None:
            logger.debug("Unknown symbol %r", name)
            return ABSENT
        return value

    def write(self, name: str, value: Value | Any) -> None:
        self._values[name] = from_python(value)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertyMap({sorted(self._values)!r})"


class ReadOnlyContext(SymbolContext):
    """View of another context that rejects writes."""

    def __init__(self, inner: SymbolContext) -> None:
        self._inner = inner

    def names(self) -> list[str]:
        return self._inner.names()

    def read(self, name: str) -> Value:
        return self._inner.read(name)

    def write(self, name: str, value: Value) -> None:
        raise SymbolWriteError(f"Cannot write symbol {name!r}: context is read-only")
