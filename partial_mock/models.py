"""Data models for mock bookkeeping."""

from dataclasses import dataclass
from typing import Any

from partial_mock.tracker import UsageTracker


@dataclass
class MockRecord:
    """Registry entry for one root mock."""

    tracker: UsageTracker
    original: Any  # the unwrapped input the mock was built from
    exact: bool = False
    shape: type | None = None
