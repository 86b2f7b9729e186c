"""Recursive read-only proxies that enforce key policy and track usage.

`wrap` turns one node of a mock input into a `Mock`. Every read through the
mock is checked against the node and reported under a dotted path, and any
container, callable or awaitable that comes out of a read or a call is
wrapped in turn, so the policy follows the caller as deep as it goes.
"""

import functools
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from partial_mock.cache import NodeCache
from partial_mock.errors import (
    ForbiddenCallError,
    InvalidAccessError,
    ReadOnlyError,
    UndefinedKeyError,
)
from partial_mock.markers import DO_NOT_CALL, DO_NOT_USE, DOES_NOT_MATTER
from partial_mock.shapes import (
    MISSING,
    is_async_context_manager,
    is_awaitable,
    is_context_manager,
    is_dunder,
    is_iterator,
    is_sequence,
    is_wrappable,
    join_path,
    lookup_attribute,
    lookup_item,
)

logger = logging.getLogger(__name__)

# A resolved awaitable may be probed for "then" without the key being supplied.
RESOLVED_EXTRAS = frozenset({"then"})


class Interceptor:
    """Access policy for one wrapped node at one path."""

    def __init__(
        self,
        cache: NodeCache,
        node: Any,
        extras: frozenset[str],
        path: str,
        report: Callable[[str], None],
    ):
        self.cache = cache
        self.node = node
        self.extras = extras
        self.path = path
        self.report = report
        self.position = 0  # elements taken so far with next()

    def read(self, segment: Any, value: Any) -> Any:
        """Apply the read policy to a value looked up under `segment`."""
        path = join_path(self.path, segment)
        if value is DOES_NOT_MATTER:
            self.report(path)
            return None
        if value is DO_NOT_USE:
            raise InvalidAccessError(path)
        if value is MISSING:
            if str(segment) not in self.extras:
                raise UndefinedKeyError(path)
            value = None
        return self.follow(value, path)

    def call(self, args: tuple, kwargs: dict) -> Any:
        if self.node is DO_NOT_CALL:
            raise ForbiddenCallError(self.path)
        # The node is the real callable; methods are already bound to the
        # real receiver, never to a mock.
        result = self.node(*args, **kwargs)
        return self.follow(result, f"{self.path}()")

    def iterate(self) -> Iterator[Any]:
        if isinstance(self.node, Mapping):
            return iter(self.node)
        if is_sequence(self.node):
            return (
                self.read(*lookup_item(self.node, index))
                for index in range(len(self.node))
            )
        return (
            self.read(position, value)
            for position, value in enumerate(iter(self.node))
        )

    def advance(self) -> Any:
        """Take the next element of an iterator node, read at its position."""
        value = next(self.node)
        position = self.position
        self.position += 1
        return self.read(position, value)

    def enter(self) -> Any:
        return self.entered(self.node.__enter__(), "__enter__()")

    async def enter_async(self) -> Any:
        return self.entered(await self.node.__aenter__(), "__aenter__()")

    def entered(self, result: Any, segment: str) -> Any:
        """Continue on the value bound by ``with ... as``.

        Context managers that return themselves keep their own mock and path.
        """
        if result is self.node:
            return wrap(self.cache, result, self.extras, self.path, self.report)
        return self.resolve(result, join_path(self.path, segment))

    def follow(self, value: Any, path: str) -> Any:
        """Report `path` and continue with the value found there."""
        self.report(path)
        return self.resolve(value, path)

    def resolve(self, value: Any, path: str, extras: Iterable[str] = ()) -> Any:
        """Wrap a value so the policy carries on below `path`."""
        if is_awaitable(value) or is_wrappable(value):
            return wrap(self.cache, value, extras, path, self.report)
        return value

    async def settle(self, awaitable: Any, path: str) -> Any:
        """Await the real value, then continue on the result.

        The result keeps the awaitable's own path as its prefix, so a field
        read after ``await mock.fetch()`` is ``fetch().field``. Each await of
        an awaitable mock settles afresh, so a future can be awaited again.
        """
        result = await awaitable
        if path:
            self.report(path)
        self.report(join_path(path, "then"))
        return self.resolve(result, path, RESOLVED_EXTRAS)


def _state(mock: "Mock") -> Interceptor:
    return object.__getattribute__(mock, "_Mock__state")


class Mock:
    """Read-only stand-in for one node of a mocked value.

    Attribute reads and subscripts go through the interceptor. Assignments and
    deletions always fail. Dunder names are passed to the real node untracked.
    The mock reports the node's class and compares and hashes as the node, so
    ``isinstance`` checks and ``==`` see the real value.
    """

    __slots__ = ("__state", "__weakref__")

    def __init__(self, state: Interceptor):
        object.__setattr__(self, "_Mock__state", state)

    @property
    def __class__(self) -> type:
        return type(_state(self).node)

    def __eq__(self, other: Any) -> bool:
        return _state(self).node == unwrap(other)

    def __ne__(self, other: Any) -> bool:
        return _state(self).node != unwrap(other)

    def __hash__(self) -> int:
        return hash(_state(self).node)

    def __getattr__(self, name: str) -> Any:
        state = _state(self)
        if is_dunder(name):
            return getattr(state.node, name)
        return state.read(name, lookup_attribute(state.node, name))

    def __getitem__(self, key: Any) -> Any:
        state = _state(self)
        if isinstance(key, slice) and is_sequence(state.node):
            return [self[index] for index in range(len(state.node))[key]]
        return state.read(*lookup_item(state.node, key))

    def __setattr__(self, name: str, value: Any) -> None:
        raise ReadOnlyError(join_path(_state(self).path, name))

    def __delattr__(self, name: str) -> None:
        raise ReadOnlyError(join_path(_state(self).path, name))

    def __setitem__(self, key: Any, value: Any) -> None:
        raise ReadOnlyError(join_path(_state(self).path, key))

    def __delitem__(self, key: Any) -> None:
        raise ReadOnlyError(join_path(_state(self).path, key))

    def __iter__(self) -> Iterator[Any]:
        return _state(self).iterate()

    def __len__(self) -> int:
        return len(_state(self).node)

    def __contains__(self, item: Any) -> bool:
        return item in _state(self).node

    def __bool__(self) -> bool:
        return bool(_state(self).node)

    def __str__(self) -> str:
        return str(_state(self).node)

    def __repr__(self) -> str:
        state = _state(self)
        return f"<Mock {state.path or '<root>'}: {state.node!r}>"


class CallableMock(Mock):
    """Mock of a function, method, class or DO_NOT_CALL marker."""

    __slots__ = ()

    def __call__(self, *args, **kwargs) -> Any:
        return _state(self).call(args, kwargs)


class AwaitableMock(Mock):
    """Mock of a coroutine, future or other awaitable."""

    __slots__ = ()

    def __await__(self):
        state = _state(self)
        return state.settle(state.node, state.path).__await__()


class IteratorMock(Mock):
    """Mock of an iterator; ``next()`` reads the element at its position."""

    __slots__ = ()

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        return _state(self).advance()


class ContextManagerMock(Mock):
    __slots__ = ()

    def __enter__(self) -> Any:
        return _state(self).enter()

    def __exit__(self, *exc_info) -> Any:
        return _state(self).node.__exit__(*exc_info)


class AsyncContextManagerMock(Mock):
    __slots__ = ()

    async def __aenter__(self) -> Any:
        return await _state(self).enter_async()

    async def __aexit__(self, *exc_info) -> Any:
        return await _state(self).node.__aexit__(*exc_info)


_PROTOCOLS = (
    (CallableMock, callable),
    (AwaitableMock, is_awaitable),
    (IteratorMock, is_iterator),
    (ContextManagerMock, is_context_manager),
    (AsyncContextManagerMock, is_async_context_manager),
)


def _mock_class(node: Any) -> type[Mock]:
    """Pick the mock class carrying every protocol the node supports."""
    bases = tuple(
        mock_class for mock_class, supports in _PROTOCOLS if supports(node)
    )
    if not bases:
        return Mock
    if len(bases) == 1:
        return bases[0]
    return _combined_class(bases)


@functools.cache
def _combined_class(bases: tuple[type[Mock], ...]) -> type[Mock]:
    name = "".join(base.__name__.removesuffix("Mock") for base in bases)
    return type(f"{name}Mock", bases, {"__slots__": ()})


def wrap(
    cache: NodeCache,
    node: Any,
    extras: Iterable[str],
    path: str,
    report: Callable[[str], None],
) -> Mock:
    """Return the mock of `node` at `path`, building it on first use.

    Args:
        cache: Mocks already built for this tree
        node: The real value to wrap
        extras: Keys that may be read even though `node` lacks them
        path: Dotted path of `node` from the root ("" for the root)
        report: Called with every path that is read or called

    Returns:
        The cached mock for (node, path), or a new one
    """
    cached = cache.get(node, path)
    if cached is not None:
        return cached

    state = Interceptor(cache, node, frozenset(extras), path, report)
    mock = _mock_class(node)(state)
    cache.put(node, path, mock)
    logger.debug(f"Wrapped {type(node).__name__} at {path or '<root>'}")
    return mock


def unwrap(value: Any) -> Any:
    """Return the real node behind a mock, or `value` itself if it is not one."""
    if isinstance(value, Mock):
        return _state(value).node
    return value
