"""Tests for usage tracking and the mock registry."""

import gc

import pytest

from partial_mock.errors import NotAMockError
from partial_mock.models import MockRecord
from partial_mock.registry import MockRegistry
from partial_mock.tracker import UsageTracker


class Handle:
    """Weak-referenceable stand-in for a root mock."""


class TestUsageTracker:
    def given_tracker_with_paths(self, *paths):
        self.tracker = UsageTracker()
        for path in paths:
            self.tracker.report(path)

    def test_keeps_first_reported_order(self):
        self.given_tracker_with_paths("b", "a", "b.c")
        assert self.tracker.paths() == ["b", "a", "b.c"]

    def test_reporting_is_idempotent(self):
        self.given_tracker_with_paths("a", "a", "a")
        assert self.tracker.paths() == ["a"]
        assert len(self.tracker) == 1

    def test_reset_clears_paths(self):
        self.given_tracker_with_paths("a", "b")
        self.tracker.reset()
        assert self.tracker.paths() == []
        assert "a" not in self.tracker

    def test_reports_again_after_reset(self):
        self.given_tracker_with_paths("a", "b")
        self.tracker.reset()
        self.tracker.report("b")
        assert self.tracker.paths() == ["b"]


class TestMockRegistry:
    def given_registered_handle(self):
        self.registry = MockRegistry()
        self.handle = Handle()
        self.record = MockRecord(tracker=UsageTracker(), original={"a": 1})
        self.registry.register(self.handle, self.record)

    def test_looks_up_record_by_identity(self):
        self.given_registered_handle()
        assert self.registry.lookup(self.handle, "get usage") is self.record
        assert self.handle in self.registry

    def test_unknown_value_raises(self):
        self.given_registered_handle()
        with pytest.raises(NotAMockError, match="trying get usage for non mock"):
            self.registry.lookup(Handle(), "get usage")

    def test_record_is_dropped_with_its_mock(self):
        self.given_registered_handle()
        del self.handle
        gc.collect()
        assert len(self.registry) == 0
