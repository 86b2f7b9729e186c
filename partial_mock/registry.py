"""Side table binding each root mock to its usage log and original input."""

import logging
import weakref
from typing import Any

from partial_mock.errors import NotAMockError
from partial_mock.models import MockRecord

logger = logging.getLogger(__name__)


class MockRegistry:
    """Identity-keyed registry of root mocks.

    Records live outside the mock so that nothing is added to the mocked
    surface. A record is dropped once its mock is garbage collected.
    """

    def __init__(self):
        self._records: dict[int, MockRecord] = {}

    def register(self, mock: Any, record: MockRecord) -> None:
        key = id(mock)
        self._records[key] = record
        weakref.finalize(mock, self._records.pop, key, None)

    def lookup(self, mock: Any, operation: str) -> MockRecord:
        """Return the record of a root mock.

        Args:
            mock: The value to look up
            operation: What the caller is doing, used in the error message

        Raises:
            NotAMockError: If `mock` was not created by partial_mock/exact_mock
        """
        record = self._records.get(id(mock))
        if record is None:
            raise NotAMockError(operation)
        return record

    def __contains__(self, mock: object) -> bool:
        return id(mock) in self._records

    def __len__(self) -> int:
        return len(self._records)


registry = MockRegistry()
