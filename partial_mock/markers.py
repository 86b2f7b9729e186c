"""Control markers that change how a mocked key may be used.

Put one of these anywhere a real value is expected in a mock input:

- DOES_NOT_MATTER: the key may be read and always yields None.
- DO_NOT_USE: reading the key fails.
- DO_NOT_CALL: the key may be read (it is truthy) but calling it fails.
"""

from partial_mock.errors import ForbiddenCallError


class Marker:
    """A named, identity-compared sentinel."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __copy__(self) -> "Marker":
        return self

    def __deepcopy__(self, memo: dict) -> "Marker":
        return self


class CallMarker(Marker):
    """Marker that stands in for a function which must never run."""

    __slots__ = ()

    def __call__(self, *args, **kwargs):
        # Only reached when the marker is used outside of a mock.
        raise ForbiddenCallError(self._name)


DOES_NOT_MATTER = Marker("DOES_NOT_MATTER")
DO_NOT_USE = Marker("DO_NOT_USE")
DO_NOT_CALL = CallMarker("DO_NOT_CALL")
