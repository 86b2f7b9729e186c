"""Optional check of a mock input against a declared shape.

A shape is a dataclass, TypedDict, NamedTuple or any annotated class. A
partial input may only use fields the shape declares; an exact input must
also supply every required field. Nested fields are checked when their type
hint is itself a shape or a container of shapes. Control markers fit anywhere.
"""

import collections.abc
import dataclasses
import inspect
import logging
import types
import typing
from typing import Any

from partial_mock.errors import SchemaMismatchError
from partial_mock.markers import Marker
from partial_mock.shapes import TEXT_TYPES, field_items, join_path

logger = logging.getLogger(__name__)

_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
)
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)
# Classes from these modules are types, not shapes with fields.
_OPAQUE_MODULES = ("builtins", "typing", "collections.abc")


def validate_shape(value: Any, shape: Any, *, exact: bool = False) -> None:
    """Check that `value` only uses fields declared by `shape`.

    Args:
        value: The mock input
        shape: A dataclass, TypedDict, NamedTuple or annotated class
        exact: Also require every required field of `shape`

    Raises:
        SchemaMismatchError: Naming the path of the first mismatch
        TypeError: If `shape` declares no fields at all
    """
    if not inspect.isclass(shape) or not (_declared_fields(shape) or _methods(shape)):
        raise TypeError(f"{shape!r} does not declare any fields")
    _validate(value, shape, exact, "")
    logger.debug(f"Mock input matches {getattr(shape, '__name__', shape)}")


def _validate(value: Any, hint: Any, exact: bool, path: str) -> None:
    if isinstance(value, Marker):
        return

    declared = _declared_fields(hint)
    if declared is not None:
        _validate_fields(value, hint, declared, exact, path)
        return

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            _validate(value, members[0], exact, path)
    elif origin is tuple and args and isinstance(value, tuple):
        if len(args) == 2 and args[1] is Ellipsis:
            element_hints = [args[0]] * len(value)
        else:
            element_hints = list(args)
        for index, (item, item_hint) in enumerate(zip(value, element_hints)):
            _validate(item, item_hint, exact, join_path(path, index))
    elif origin in _SEQUENCE_ORIGINS and args and _is_collection(value):
        for index, item in enumerate(value):
            _validate(item, args[0], exact, join_path(path, index))
    elif origin in _MAPPING_ORIGINS and len(args) == 2:
        if isinstance(value, collections.abc.Mapping):
            for key, item in value.items():
                _validate(item, args[1], exact, join_path(path, key))


def _validate_fields(
    value: Any, shape: type, declared: dict[str, Any], exact: bool, path: str
) -> None:
    if shape in type(value).__mro__:
        # A real instance is complete by construction.
        return
    supplied = field_items(value)
    if supplied is None:
        # Callables, awaitables and primitives stand in for the value as a
        # whole and have no fields to compare.
        return

    allowed = declared | {name: Any for name in _methods(shape)}
    for key, child in supplied:
        if key not in allowed:
            raise SchemaMismatchError(
                f"{join_path(path, key)} is not a field of {shape.__name__}",
                join_path(path, key),
            )
        _validate(child, allowed[key], exact, join_path(path, key))

    if exact:
        supplied_keys = {key for key, _ in supplied}
        required = getattr(shape, "__required_keys__", declared.keys())
        missing = [
            name
            for name in declared
            if name in required and name not in supplied_keys
        ]
        if missing:
            raise SchemaMismatchError(
                f"{join_path(path, missing[0])} is required by {shape.__name__}",
                join_path(path, missing[0]),
            )


def _declared_fields(hint: Any) -> dict[str, Any] | None:
    """Field name to type hint for a shape, or None if `hint` is not one."""
    if not inspect.isclass(hint) or hint.__module__ in _OPAQUE_MODULES:
        return None
    if dataclasses.is_dataclass(hint):
        hints = typing.get_type_hints(hint)
        return {
            field.name: hints.get(field.name, Any)
            for field in dataclasses.fields(hint)
        }
    hints = typing.get_type_hints(hint)
    return {
        name: field_hint
        for name, field_hint in hints.items()
        if field_hint is not typing.ClassVar
        and typing.get_origin(field_hint) is not typing.ClassVar
    }


def _methods(shape: type) -> set[str]:
    """Public methods and properties the shape defines itself."""
    names = set()
    for klass in shape.__mro__:
        if klass.__module__ in _OPAQUE_MODULES:
            continue
        for name, attribute in vars(klass).items():
            if name.startswith("_"):
                continue
            if isinstance(
                attribute, (types.FunctionType, staticmethod, classmethod, property)
            ):
                names.add(name)
    return names


def _is_collection(value: Any) -> bool:
    return isinstance(value, collections.abc.Iterable) and not isinstance(
        value, TEXT_TYPES + (collections.abc.Mapping,)
    )
