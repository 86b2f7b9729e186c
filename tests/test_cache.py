"""Tests for the node cache."""

from partial_mock.cache import NodeCache, identity_key


class TestIdentityKey:
    def test_equal_values_have_distinct_keys(self):
        first, second = {"a": 1}, {"a": 1}
        assert identity_key(first) != identity_key(second)

    def test_bound_methods_share_a_key(self):
        """Each attribute read creates a new bound method object."""
        node = {"a": 1}
        assert identity_key(node.get) == identity_key(node.get)
        assert identity_key(node.get) != identity_key(node.keys)

    def test_builtin_functions_are_keyed_as_nodes(self):
        assert identity_key(len) == ("node", id(len))


class TestNodeCache:
    def given_cache_with_entry(self):
        self.cache = NodeCache()
        self.node = {"a": 1}
        self.mock = object()
        self.cache.put(self.node, "a", self.mock)

    def test_returns_cached_mock_for_same_node_and_path(self):
        self.given_cache_with_entry()
        assert self.cache.get(self.node, "a") is self.mock

    def test_other_path_is_a_miss(self):
        self.given_cache_with_entry()
        assert self.cache.get(self.node, "b") is None

    def test_equal_node_is_a_miss(self):
        self.given_cache_with_entry()
        assert self.cache.get({"a": 1}, "a") is None

    def test_counts_mocks(self):
        self.given_cache_with_entry()
        self.cache.put(self.node, "b", object())
        assert len(self.cache) == 2
