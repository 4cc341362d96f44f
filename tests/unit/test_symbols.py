"""Tests for symbol contexts."""

from __future__ import annotations

import pytest

from propexpr.core.errors import SymbolWriteError
from propexpr.core.ir.values import ABSENT, Float, Integer, List, String
from propexpr.core.symbols import PropertyMap, ReadOnlyContext, SymbolContext


class TestPropertyMap:
    def test_read_known(self, foo_context: PropertyMap) -> None:
        assert foo_context.read("FOO") == Integer(value=2)

    def test_read_unknown(self, foo_context: PropertyMap) -> None:
        assert foo_context.read("Foo") == ABSENT
        assert foo_context.read("") == ABSENT

    def test_write_value(self) -> None:
        ctx = PropertyMap()
        ctx.write("ratio", Float(value=0.5))
        assert ctx.read("ratio") == Float(value=0.5)

    def test_write_native(self) -> None:
        ctx = PropertyMap()
        ctx.write("title", "Scene")
        ctx.write("origin", [0, 10])
        assert ctx.read("title") == String(value="Scene")
        assert ctx.read("origin") == List(items=(Integer(value=0), Integer(value=10)))

    def test_write_replaces(self, foo_context: PropertyMap) -> None:
        foo_context.write("FOO", 3)
        assert foo_context.read("FOO") == Integer(value=3)

    def test_names(self) -> None:
        ctx = PropertyMap.from_mapping({"b": 1, "a": 2})
        assert sorted(ctx.names()) == ["a", "b"]
        assert "a" in ctx
        assert len(ctx) == 2

    def test_rejects_unsupported(self) -> None:
        with pytest.raises(TypeError):
            PropertyMap({"bad": object()})

    def test_is_a_symbol_context(self) -> None:
        assert isinstance(PropertyMap(), SymbolContext)


class TestReadOnlyContext:
    def test_reads_pass_through(self, foo_context: PropertyMap) -> None:
        view = ReadOnlyContext(foo_context)
        assert view.read("FOO") == Integer(value=2)
        assert view.names() == ["FOO"]

    def test_writes_rejected(self, foo_context: PropertyMap) -> None:
        view = ReadOnlyContext(foo_context)
        with pytest.raises(SymbolWriteError, match="read-only"):
            view.write("FOO", Integer(value=5))
        assert foo_context.read("FOO") == Integer(value=2)

    def test_abstract_context_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            SymbolContext()  # type: ignore[abstract]
