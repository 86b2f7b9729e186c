"""Identity-keyed table of the mocks built for one mock tree."""

import types
from dataclasses import dataclass, field
from typing import Any

_BOUND_METHOD_TYPES = (
    types.MethodType,
    types.BuiltinMethodType,
    types.MethodWrapperType,
)


def identity_key(node: Any) -> tuple:
    """Key a node by identity.

    Every attribute read of a method produces a new bound method object, so
    bound methods are keyed by their receiver and name instead.
    """
    if isinstance(node, _BOUND_METHOD_TYPES):
        receiver = getattr(node, "__self__", None)
        if receiver is not None and not isinstance(receiver, types.ModuleType):
            return ("method", id(receiver), node.__name__)
    return ("node", id(node))


@dataclass
class _Entry:
    node: Any  # keeps the node alive so its id() cannot be reused
    mocks: dict[str, Any] = field(default_factory=dict)


class NodeCache:
    """Map (node identity, path) to the mock built for it.

    Plain dicts and lists cannot be weakly referenced, so entries hold their
    node strongly. A cache belongs to a single root mock and goes away with it.
    """

    def __init__(self):
        self._entries: dict[tuple, _Entry] = {}

    def get(self, node: Any, path: str) -> Any | None:
        """Return the mock already built for `node` at `path`, if any."""
        entry = self._entries.get(identity_key(node))
        if entry is None:
            return None
        return entry.mocks.get(path)

    def put(self, node: Any, path: str, mock: Any) -> None:
        key = identity_key(node)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry(node)
        entry.mocks[path] = mock

    def __len__(self) -> int:
        return sum(len(entry.mocks) for entry in self._entries.values())
