"""Partial mocks that fail loudly on unexpected access and track key usage."""

from partial_mock.errors import (
    ForbiddenCallError,
    InvalidAccessError,
    NotAMockError,
    PartialMockError,
    ReadOnlyError,
    SchemaMismatchError,
    UndefinedKeyError,
    UnusedKeysError,
)
from partial_mock.interceptor import unwrap
from partial_mock.markers import DO_NOT_CALL, DO_NOT_USE, DOES_NOT_MATTER
from partial_mock.mock import (
    exact_mock,
    get_keys_used_in_mock,
    is_mock,
    partial_mock,
    reset_mock_usage,
)
from partial_mock.schema import validate_shape
from partial_mock.verifier import expect_no_unused_keys, find_unused_keys

__all__ = [
    # Mock creation
    "partial_mock",
    "exact_mock",
    # Control markers
    "DOES_NOT_MATTER",
    "DO_NOT_USE",
    "DO_NOT_CALL",
    # Usage inspection
    "get_keys_used_in_mock",
    "reset_mock_usage",
    "expect_no_unused_keys",
    "find_unused_keys",
    "is_mock",
    "unwrap",
    # Shape validation
    "validate_shape",
    # Errors
    "PartialMockError",
    "UndefinedKeyError",
    "InvalidAccessError",
    "ForbiddenCallError",
    "ReadOnlyError",
    "NotAMockError",
    "UnusedKeysError",
    "SchemaMismatchError",
]
