"""Per-mock log of the paths that were read or called."""

import logging

logger = logging.getLogger(__name__)


class UsageTracker:
    """Ordered set of accessed paths.

    Paths are kept in the order they were first reported. Reporting a path
    again is a no-op until the tracker is reset.
    """

    def __init__(self):
        self._paths: dict[str, None] = {}

    def report(self, path: str) -> None:
        """Record that `path` was accessed."""
        if path not in self._paths:
            logger.debug(f"Mock key used: {path}")
            self._paths[path] = None

    def paths(self) -> list[str]:
        """Return the accessed paths in first-reported order."""
        return list(self._paths)

    def reset(self) -> None:
        """Forget every recorded access."""
        self._paths.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)
