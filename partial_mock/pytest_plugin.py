"""pytest integration: the ``partial_mocks`` fixture.

Mocks created through the fixture can be checked for unused keys when the
test finishes. The check is off by default and is switched on by any of:

- the ``partial_mock_verify_unused = true`` ini option
- the ``--partial-mock-verify-unused`` command-line flag
- the ``@pytest.mark.verify_unused_keys`` marker on a test
"""

import logging
from typing import Any

import pytest

from partial_mock.mock import exact_mock, partial_mock
from partial_mock.verifier import expect_no_unused_keys

logger = logging.getLogger(__name__)

VERIFY_UNUSED_INI = "partial_mock_verify_unused"
VERIFY_UNUSED_MARKER = "verify_unused_keys"
CALL_REPORT = pytest.StashKey[pytest.TestReport]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("partial-mock")
    group.addoption(
        "--partial-mock-verify-unused",
        action="store_true",
        default=False,
        dest="partial_mock_verify_unused",
        help="Fail tests whose partial_mocks have supplied keys that were never read",
    )
    parser.addini(
        VERIFY_UNUSED_INI,
        type="bool",
        default=False,
        help="Check mocks from the partial_mocks fixture for unused keys",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        f"{VERIFY_UNUSED_MARKER}: fail if a mock from partial_mocks has unused keys",
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.stash[CALL_REPORT] = report


class MockSession:
    """Creates mocks for one test and remembers them for verification."""

    def __init__(self):
        self.mocks: list[Any] = []

    def partial(self, value: Any, shape: type | None = None) -> Any:
        """Create a partial mock, see partial_mock.partial_mock()."""
        mock = partial_mock(value, shape=shape)
        self.mocks.append(mock)
        return mock

    def exact(self, value: Any, shape: type | None = None) -> Any:
        """Create an exact mock, see partial_mock.exact_mock()."""
        mock = exact_mock(value, shape=shape)
        self.mocks.append(mock)
        return mock

    def verify(self) -> None:
        """Run expect_no_unused_keys() on every mock of the session."""
        logger.info(f"Verifying {len(self.mocks)} mocks for unused keys")
        for mock in self.mocks:
            expect_no_unused_keys(mock)


def verify_unused_enabled(request: pytest.FixtureRequest) -> bool:
    """Tell whether the requesting test asked for the unused-key check."""
    if request.node.get_closest_marker(VERIFY_UNUSED_MARKER) is not None:
        return True
    if request.config.getoption("partial_mock_verify_unused"):
        return True
    return bool(request.config.getini(VERIFY_UNUSED_INI))


@pytest.fixture
def partial_mocks(request: pytest.FixtureRequest):
    """Factory for mocks that are verified at teardown when configured."""
    session = MockSession()
    yield session
    report = request.node.stash.get(CALL_REPORT, None)
    if report is not None and report.failed:
        logger.info("Skipping unused key check of a failed test")
        return
    if verify_unused_enabled(request):
        session.verify()
