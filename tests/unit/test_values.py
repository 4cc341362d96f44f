"""Tests for propexpr values: construction, normalization, rendering."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from propexpr.core.ir.values import (
    ABSENT,
    Absent,
    Boolean,
    Float,
    Integer,
    List,
    String,
    ValueKind,
    as_display_string,
    from_bool,
    from_double,
    from_int,
    from_literal_string,
    from_python,
    from_sequence,
    is_absent,
    kind_of,
    to_python,
)


class TestConstruction:
    def test_direct_constructors(self) -> None:
        assert from_literal_string("x") == String(value="x")
        assert from_bool(True) == Boolean(value=True)
        assert from_int(3) == Integer(value=3)
        assert from_double(2) == Float(value=2.0)
        assert isinstance(from_double(2).value, float)

    def test_single_element_sequence_collapses(self) -> None:
        assert from_sequence([Integer(value=1)]) == Integer(value=1)

    def test_longer_sequence_is_a_list(self) -> None:
        result = from_sequence([Integer(value=1), String(value="a")])
        assert result == List(items=(Integer(value=1), String(value="a")))

    def test_values_are_frozen(self) -> None:
        value = Integer(value=1)
        with pytest.raises(ValidationError):
            value.value = 2  # type: ignore[misc]

    def test_absent_singleton_equality(self) -> None:
        assert Absent() == ABSENT
        assert is_absent(ABSENT)
        assert not is_absent(Integer(value=0))

    def test_cases_are_distinct(self) -> None:
        assert Integer(value=1) != Float(value=1.0)
        assert Integer(value=1) != Boolean(value=True)


class TestFromPython:
    def test_scalars(self) -> None:
        assert from_python(None) == ABSENT
        assert from_python(True) == Boolean(value=True)
        assert from_python(7) == Integer(value=7)
        assert from_python(0.25) == Float(value=0.25)
        assert from_python("hi") == String(value="hi")

    def test_bool_is_not_an_integer(self) -> None:
        assert kind_of(from_python(False)) == ValueKind.BOOLEAN

    def test_lists(self) -> None:
        assert from_python([1, "a"]) == List(items=(Integer(value=1), String(value="a")))
        assert from_python([1]) == Integer(value=1)
        assert from_python((1, [2, 3])) == List(
            items=(Integer(value=1), List(items=(Integer(value=2), Integer(value=3))))
        )

    def test_values_pass_through(self) -> None:
        value = Float(value=1.5)
        assert from_python(value) is value

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="dict"):
            from_python({"a": 1})

    def test_to_python(self) -> None:
        assert to_python(ABSENT) is None
        assert to_python(from_python([1, "a", True, 0.5])) == [1, "a", True, 0.5]


class TestDisplay:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (ABSENT, "Undefined"),
            (Boolean(value=True), "true"),
            (Boolean(value=False), "false"),
            (Integer(value=-12), "-12"),
            (Float(value=5.0), "5"),
            (Float(value=0.5), "0.5"),
            (Float(value=3.14159), "3.14159"),
            (Float(value=1e20), "1e+20"),
            (String(value="IT'S"), "IT'S"),
            (
                List(items=(Integer(value=1), String(value="FOO"), Float(value=2.5))),
                "[1, FOO, 2.5]",
            ),
        ],
    )
    def test_as_display_string(self, value, expected: str) -> None:
        assert as_display_string(value) == expected
        assert str(value) == expected

    def test_kind_of(self) -> None:
        assert kind_of(ABSENT) == ValueKind.ABSENT
        assert kind_of(Float(value=1.0)) == ValueKind.FLOAT
        assert kind_of(List(items=())) == ValueKind.LIST
