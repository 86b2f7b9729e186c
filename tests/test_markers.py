"""Tests for control markers."""

import copy

import pytest

from partial_mock.errors import ForbiddenCallError
from partial_mock.markers import DO_NOT_CALL, DO_NOT_USE, DOES_NOT_MATTER


class TestMarkers:
    def test_markers_are_distinct(self):
        assert len({id(DOES_NOT_MATTER), id(DO_NOT_USE), id(DO_NOT_CALL)}) == 3

    def test_markers_survive_copies(self):
        value = {"a": DOES_NOT_MATTER, "b": [DO_NOT_USE]}
        copied = copy.deepcopy(value)
        assert copied["a"] is DOES_NOT_MATTER
        assert copied["b"][0] is DO_NOT_USE
        assert copy.copy(DO_NOT_CALL) is DO_NOT_CALL

    def test_markers_have_readable_repr(self):
        assert repr(DO_NOT_USE) == "DO_NOT_USE"

    def test_markers_are_truthy(self):
        assert DOES_NOT_MATTER
        assert DO_NOT_CALL

    def test_do_not_call_fails_outside_a_mock(self):
        with pytest.raises(ForbiddenCallError, match="DO_NOT_CALL"):
            DO_NOT_CALL()
