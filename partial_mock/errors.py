"""Exceptions raised by partial mocks.

Every failure is raised at the access, call or assignment that caused it and
is never handled inside the library, so the traceback points at the code that
touched something it should not have.
"""


class PartialMockError(Exception):
    """Base class for all partial mock failures."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class UndefinedKeyError(PartialMockError):
    """A key was read that the mock was never given.

    Not an AttributeError or KeyError on purpose: getattr() defaults,
    hasattr() and similar probes must not quietly turn this into a fallback.
    """

    def __init__(self, path: str):
        super().__init__(f"reading partial key {path} not defined in mock", path)


class InvalidAccessError(PartialMockError):
    """A key marked with DO_NOT_USE was read."""

    def __init__(self, path: str):
        super().__init__(f"key {path} was configured as DO_NOT_USE", path)


class ForbiddenCallError(PartialMockError):
    """A value marked with DO_NOT_CALL was invoked."""

    def __init__(self, path: str):
        super().__init__(f"key {path} was configured as DO_NOT_CALL", path)


class ReadOnlyError(PartialMockError, TypeError):
    """Something tried to assign or delete through a mock."""

    def __init__(self, path: str):
        super().__init__(f"attempt to set {path} to a read only mock", path)


class NotAMockError(PartialMockError, TypeError):
    """An inspection helper was given a value that is not a root mock."""

    def __init__(self, operation: str):
        super().__init__(f"trying {operation} for non mock")
        self.operation = operation


class UnusedKeysError(PartialMockError, AssertionError):
    """A mock was given keys that were never read."""

    def __init__(self, unused_keys: list[str]):
        super().__init__(
            "You have defined a larger object than you use. "
            f"Unused keys {', '.join(unused_keys)}"
        )
        self.unused_keys = unused_keys


class SchemaMismatchError(PartialMockError, TypeError):
    """A mock input does not fit the shape it was declared against."""
