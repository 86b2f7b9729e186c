"""Shape adapters: how keys are looked up on each kind of mocked value.

A mocked node is one of a handful of shapes. Mappings and attribute-bearing
objects act as plain objects, non-text sequences as arrays, sets and other
iterables as element collections, callables as functions and awaitables as
promises. The interceptor asks this module for a key's value and for whether
a value needs wrapping; it never inspects node types itself.
"""

import contextlib
import dataclasses
import enum
import inspect
import numbers
import operator
from collections.abc import Iterable, Iterator, Mapping, Sequence, Set
from typing import Any

from partial_mock.markers import DO_NOT_CALL


class _Missing:
    """Result of a lookup for a key the node does not have."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

TEXT_TYPES = (str, bytes, bytearray, memoryview)
PRIMITIVE_TYPES = (type(None), numbers.Number, enum.Enum) + TEXT_TYPES


def join_path(prefix: str, segment: Any) -> str:
    """Append a key to a dotted path."""
    return f"{prefix}.{segment}" if prefix else str(segment)


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_sequence(node: Any) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, TEXT_TYPES)


def is_namedtuple(node: Any) -> bool:
    return isinstance(node, tuple) and hasattr(type(node), "_fields")


def is_awaitable(value: Any) -> bool:
    return inspect.isawaitable(value)


def is_iterator(value: Any) -> bool:
    return isinstance(value, Iterator)


def is_context_manager(value: Any) -> bool:
    return isinstance(value, contextlib.AbstractContextManager)


def is_async_context_manager(value: Any) -> bool:
    return isinstance(value, contextlib.AbstractAsyncContextManager)


def is_wrappable(value: Any) -> bool:
    """Decide whether a value read from a mock must itself be mocked.

    Primitives (None, numbers, text, enum members) are handed back as they
    are. Containers, callables and objects carrying attributes are wrapped so
    access checks and tracking continue below them.
    """
    if value is DO_NOT_CALL:
        return True
    if isinstance(value, PRIMITIVE_TYPES):
        return False
    return (
        isinstance(value, (Mapping, Iterable))
        or callable(value)
        or hasattr(value, "__dict__")
    )


def lookup_attribute(node: Any, name: str) -> Any:
    """Read `node.name` the way a mock attribute read sees it.

    Mapping keys win over the mapping's own methods, so ``mock.items`` is the
    ``"items"`` key when one was supplied and ``dict.items`` otherwise.
    Attributes come from the real node, so methods stay bound to it.

    Returns:
        The value, or MISSING when the node has no such key
    """
    if isinstance(node, Mapping) and name in node:
        return node[name]
    return getattr(node, name, MISSING)


def lookup_item(node: Any, key: Any) -> tuple[Any, Any]:
    """Read `node[key]` the way a mock subscript sees it.

    Returns:
        (path segment, value) where value is MISSING for an absent key.
        Sequence indexes are normalised so ``-1`` and the last index share a
        path; namedtuple positions use the field name.
    """
    if isinstance(node, Mapping):
        return key, (node[key] if key in node else MISSING)

    if is_sequence(node):
        index = operator.index(key)
        if index < 0:
            index += len(node)
        if not 0 <= index < len(node):
            return key, MISSING
        segment = node._fields[index] if is_namedtuple(node) else index
        return segment, node[index]

    try:
        return key, node[key]
    except LookupError:
        return key, MISSING


def field_items(value: Any) -> list[tuple[str, Any]] | None:
    """List the named fields a structured value was given.

    Covers mappings, namedtuples, dataclass instances and plain objects with
    public instance attributes. Returns None for anything else.
    """
    if isinstance(value, Mapping):
        return [(str(key), child) for key, child in value.items()]
    if is_namedtuple(value):
        return list(zip(type(value)._fields, value))
    if isinstance(value, (type, Set) + PRIMITIVE_TYPES) or callable(value):
        return None
    if dataclasses.is_dataclass(value):
        return [
            (field.name, getattr(value, field.name))
            for field in dataclasses.fields(value)
        ]
    if is_sequence(value) or is_awaitable(value) or not hasattr(value, "__dict__"):
        return None
    return [
        (name, child)
        for name, child in vars(value).items()
        if not name.startswith("_")
    ]


def entries(value: Any) -> list[tuple[str, Any]]:
    """Enumerable (key, value) pairs of a node, as the unused-key walk sees them.

    Sequences contribute their indexes. Sets, callables, awaitables and
    primitives contribute nothing.
    """
    fields = field_items(value)
    if fields is not None:
        return fields
    if is_sequence(value):
        return [(str(index), child) for index, child in enumerate(value)]
    return []
