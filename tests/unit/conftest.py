"""
Fixtures for harness unit tests.

Every fixture here is built on the in-memory fakes from
``tests.mocks.browser``: a page whose elements are declared by the
test, a clock that only moves when the harness sleeps, and a locator
map with short CSS-style selectors.
"""

import pytest

from config import get_config
from harness import Interactor, LocatorMap, WorkflowRunner
from tests.mocks.browser import FakeBrowser, FakeClock, FakeContext, FakePage


UNIT_LOCATORS = {
    "login": {
        "username": "#username",
        "password": "#password",
        "submit": "#login",
    },
    "dashboard": {"header": "#dashboard h2"},
    "dialog": {"ok": ".swal2-confirm"},
    "nav": {"category": "#nav-category"},
    "category": {
        "header": "#category h2",
        "tile": "#add-category",
        "name": "#category-name",
        "icon": "#category-icon",
        "color": "#category-color",
        "save": "#category-save",
    },
    "transaction": {"first_amount": "#row-1 .amount"},
}


@pytest.fixture
def settings():
    """Short-timeout configuration for unit tests."""
    return get_config("testing")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def page(clock):
    return FakePage(clock)


@pytest.fixture
def locators():
    return LocatorMap(UNIT_LOCATORS)


@pytest.fixture
def interactor(page, locators, clock, settings):
    """Interactor bound to the fake page and clock."""
    return Interactor(
        page,
        locators,
        timeout=settings.DEFAULT_TIMEOUT,
        poll_interval=settings.POLL_INTERVAL,
        settle_delay=0.5,
        clock=clock,
        sleep=clock.sleep,
    )


@pytest.fixture
def runner(interactor):
    return WorkflowRunner(interactor)


@pytest.fixture
def context(page):
    return FakeContext(page)


@pytest.fixture
def browser(context):
    return FakeBrowser(context)
