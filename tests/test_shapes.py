"""Tests for shape adapters."""

import contextlib
import enum
import threading
from dataclasses import dataclass
from decimal import Decimal
from types import SimpleNamespace

import pytest

from partial_mock.markers import DO_NOT_CALL, DOES_NOT_MATTER
from partial_mock.shapes import (
    MISSING,
    entries,
    field_items,
    is_async_context_manager,
    is_context_manager,
    is_iterator,
    is_wrappable,
    join_path,
    lookup_attribute,
    lookup_item,
)


class Color(enum.Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class Lookup:
    def __getitem__(self, key):
        if key == "known":
            return 1
        raise KeyError(key)


class TestJoinPath:
    def test_joins_with_dot(self):
        assert join_path("a.b", "c") == "a.b.c"

    def test_empty_prefix_gives_segment(self):
        assert join_path("", 0) == "0"


class TestProtocols:
    def test_iterators_are_told_apart_from_iterables(self):
        assert is_iterator(iter([1]))
        assert is_iterator(x for x in [])
        assert not is_iterator([1])
        assert not is_iterator({"a": 1})

    def test_context_managers(self):
        assert is_context_manager(threading.Lock())
        assert is_context_manager(contextlib.nullcontext())
        assert not is_context_manager({})
        assert not is_async_context_manager(threading.Lock())
        assert is_async_context_manager(contextlib.nullcontext())


class TestIsWrappable:
    @pytest.mark.parametrize(
        "value",
        [None, True, 1, 1.5, Decimal("2"), "text", b"bytes", Color.RED],
    )
    def test_primitives_are_returned_as_is(self, value):
        assert not is_wrappable(value)

    @pytest.mark.parametrize(
        "value",
        [{}, [], (), {1}, SimpleNamespace(a=1), Point(1, 2), len, DO_NOT_CALL],
    )
    def test_containers_and_callables_are_wrapped(self, value):
        assert is_wrappable(value)


class TestLookupAttribute:
    def test_mapping_key_wins_over_method(self):
        assert lookup_attribute({"items": 1}, "items") == 1

    def test_mapping_method_is_bound_to_real_mapping(self):
        node = {"k": 1}
        method = lookup_attribute(node, "get")
        assert method.__self__ is node

    def test_missing_attribute(self):
        assert lookup_attribute(SimpleNamespace(a=1), "b") is MISSING


class TestLookupItem:
    def test_mapping_keys(self):
        assert lookup_item({1: "one"}, 1) == (1, "one")
        assert lookup_item({}, "a") == ("a", MISSING)

    def test_sequence_indexes_are_normalised(self):
        assert lookup_item(["a", "b"], -2) == (0, "a")
        assert lookup_item(["a"], 3) == (3, MISSING)

    def test_sequence_rejects_non_integer_keys(self):
        with pytest.raises(TypeError):
            lookup_item(["a"], "x")

    def test_custom_subscript_lookup_errors_are_missing(self):
        assert lookup_item(Lookup(), "known") == ("known", 1)
        assert lookup_item(Lookup(), "other") == ("other", MISSING)


class TestFieldItems:
    def test_dataclass_fields(self):
        assert field_items(Point(1, 2)) == [("x", 1), ("y", 2)]

    def test_public_instance_attributes(self):
        value = SimpleNamespace(a=1, _hidden=2)
        assert field_items(value) == [("a", 1)]

    def test_unstructured_values_have_no_fields(self):
        assert field_items({1, 2}) is None
        assert field_items(len) is None
        assert field_items(DOES_NOT_MATTER) is None
        assert field_items([1]) is None


class TestEntries:
    def test_sequences_contribute_indexes(self):
        assert entries(["a", "b"]) == [("0", "a"), ("1", "b")]

    def test_sets_contribute_nothing(self):
        assert entries({"a"}) == []
