"""Detect over-specified mocks: keys that were supplied but never read.

Known limitation: only reads made through the mock are seen. A wrapped
function that uses its own closure, or a method that reads ``self``, touches
the real object directly, so those fields are never marked as used.
"""

import logging
from typing import Any

from partial_mock.errors import UnusedKeysError
from partial_mock.markers import DOES_NOT_MATTER
from partial_mock.registry import registry
from partial_mock.shapes import entries

logger = logging.getLogger(__name__)


def known_keys(value: Any) -> list[str]:
    """List every dotted key path supplied in a mock input.

    Keys holding None or DOES_NOT_MATTER are left out, but containers are
    walked regardless so their own keys still count.

    Args:
        value: The original, unwrapped mock input

    Returns:
        Dotted paths in input order, parents before children
    """
    return _walk(value, frozenset())


def _walk(value: Any, active: frozenset[int]) -> list[str]:
    # `active` holds the containers on the current branch; self-references
    # are not walked twice.
    active = active | {id(value)}
    keys = []
    for key, child in entries(value):
        if child is not None and child is not DOES_NOT_MATTER:
            keys.append(key)
        if id(child) not in active:
            keys.extend(f"{key}.{subkey}" for subkey in _walk(child, active))
    return keys


def find_unused_keys(mock: Any) -> list[str]:
    """Return the supplied keys of `mock` that have not been read yet.

    Raises:
        NotAMockError: If `mock` is not a root mock
    """
    record = registry.lookup(mock, "get usage")
    return [key for key in known_keys(record.original) if key not in record.tracker]


def expect_no_unused_keys(mock: Any) -> None:
    """Require a "minimum viable mock": every supplied value was read.

    Combine with reset_mock_usage() and get_keys_used_in_mock() to scope the
    check to part of a test.

    Args:
        mock: A mock created by partial_mock() or exact_mock()

    Raises:
        UnusedKeysError: Listing every supplied key that was never read
        NotAMockError: If `mock` is not a root mock
    """
    unused_keys = find_unused_keys(mock)
    if unused_keys:
        logger.error(f"unused keys: {unused_keys}")
        raise UnusedKeysError(unused_keys)
