"""Playwright fixtures for the SpendWise E2E journey."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator

import pytest
import requests
from playwright.sync_api import Browser

from config import get_config
from harness import BrowserSession, LocatorMap, SetupFailure
from tests.e2e.pages.base_page import BasePage
from tests.e2e.pages.budget_page import BudgetPage
from tests.e2e.pages.category_page import CategoryPage
from tests.e2e.pages.dashboard_page import DashboardPage
from tests.e2e.pages.transaction_page import TransactionPage
from tests.e2e.pages.wallet_page import WalletPage

logger = logging.getLogger(__name__)


def _wait_for_app(url: str, timeout: float, verify: bool, interval: float = 1) -> bool:
    """Poll the app entry point until it answers or the timeout elapses."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            response = requests.get(url, timeout=2, verify=verify)
            if response.status_code < 500:
                return True
        except requests.RequestException:
            pass
        time.sleep(interval)
    return False


@pytest.fixture(scope="session")
def settings():
    """Configuration class for this run (SPENDWISE_ENV selects it)."""
    return get_config()


@pytest.fixture(scope="session")
def locators(settings) -> LocatorMap:
    return LocatorMap.from_yaml(settings.LOCATORS_FILE)


@pytest.fixture(scope="session")
def live_app(settings) -> str:
    """
    Return the SpendWise base URL once the app answers HTTP requests.

    The suite is skipped when nothing is listening, so a checkout
    without a running app still passes its unit tests.
    """
    base_url = settings.BASE_URL
    if not _wait_for_app(base_url, settings.APP_READY_TIMEOUT, settings.VERIFY_TLS):
        pytest.skip(
            f"SpendWise is not reachable at {base_url}; "
            "start it or set SPENDWISE_BASE_URL to run E2E tests"
        )
    return base_url


@pytest.fixture(scope="session")
def spendwise_session(
    settings, locators: LocatorMap, live_app: str, browser: Browser
) -> Generator[BrowserSession, None, None]:
    """
    One logged-in session shared by the whole ordered journey.

    The app is checked before the browser is requested, so a missing
    app skips without launching one.

    Login happens once. A failed login aborts the run: every later test
    depends on it. The session is disposed after the last test whether
    or not earlier tests failed.
    """
    try:
        session = BrowserSession.create(browser, settings, locators)
    except SetupFailure as exc:
        pytest.exit(f"SpendWise setup failed: {exc}", returncode=3)

    try:
        yield session
    finally:
        session.dispose()


@pytest.fixture
def dashboard_page(spendwise_session: BrowserSession) -> DashboardPage:
    return DashboardPage(spendwise_session)


@pytest.fixture
def category_page(spendwise_session: BrowserSession) -> CategoryPage:
    return CategoryPage(spendwise_session)


@pytest.fixture
def wallet_page(spendwise_session: BrowserSession) -> WalletPage:
    return WalletPage(spendwise_session)


@pytest.fixture
def transaction_page(spendwise_session: BrowserSession) -> TransactionPage:
    return TransactionPage(spendwise_session)


@pytest.fixture
def budget_page(spendwise_session: BrowserSession) -> BudgetPage:
    return BudgetPage(spendwise_session)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Log the failure and capture a screenshot of the shared page."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        logger.error("%s failed: %s", item.name, call.excinfo.value if call.excinfo else "")
        session = item.funcargs.get("spendwise_session")
        if session and not session.disposed:
            test_name = item.name.replace("/", "_").replace("::", "_")
            try:
                path = BasePage(session).take_screenshot(test_name)
                print(f"\nScreenshot saved: {path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
