"""Public entry points: build mocks and inspect their usage."""

import logging
from typing import Any, TypeVar

from partial_mock.cache import NodeCache
from partial_mock.interceptor import wrap
from partial_mock.models import MockRecord
from partial_mock.registry import registry
from partial_mock.schema import validate_shape
from partial_mock.tracker import UsageTracker

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partial_mock(value: Any, shape: type[T] | None = None) -> T:
    """Create a deep partial mock with built-in under-mocking detection.

    Reading a key that `value` does not supply raises UndefinedKeyError.
    Combine with expect_no_unused_keys() to catch over-mocking as well.

    Control markers change the policy of single keys:
    DOES_NOT_MATTER allows the read but yields None, DO_NOT_USE forbids the
    read and DO_NOT_CALL forbids the call.

    Args:
        value: Any subset of the real value, at any depth
        shape: Optional type to check the supplied keys against

    Returns:
        A read-only mock standing in for the full value

    Raises:
        SchemaMismatchError: If `shape` is given and `value` has a key it lacks
    """
    if shape is not None:
        validate_shape(value, shape)
    return _create(value, exact=False, shape=shape)


def exact_mock(value: Any, shape: type[T] | None = None) -> T:
    """Create a mock from a complete value.

    Behaves exactly like partial_mock(). With `shape`, every field of the
    shape must also be supplied.
    """
    if shape is not None:
        validate_shape(value, shape, exact=True)
    return _create(value, exact=True, shape=shape)


def _create(value: Any, exact: bool, shape: type | None) -> Any:
    tracker = UsageTracker()
    mock = wrap(NodeCache(), value, (), "", tracker.report)
    registry.register(
        mock, MockRecord(tracker=tracker, original=value, exact=exact, shape=shape)
    )
    kind = "exact" if exact else "partial"
    logger.debug(f"Created {kind} mock of {type(value).__name__}")
    return mock


def get_keys_used_in_mock(mock: Any) -> list[str]:
    """Return the paths read or called on a mock, in first-use order.

    Raises:
        NotAMockError: If `mock` is not a root mock
    """
    return registry.lookup(mock, "get usage").tracker.paths()


def reset_mock_usage(mock: Any) -> None:
    """Clear the usage log of a mock. Cached nested mocks are kept.

    Raises:
        NotAMockError: If `mock` is not a root mock
    """
    registry.lookup(mock, "reset usage").tracker.reset()
    logger.info("Mock usage reset")


def is_mock(value: Any) -> bool:
    """Tell whether `value` is a root mock from partial_mock()/exact_mock()."""
    return value in registry
