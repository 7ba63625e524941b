"""
Shared, authenticated browser session.

One session is created before the ordered test group runs: it opens a
browser context, logs in through the login form and waits for the
post-login marker. Every test in the group receives the same session by
reference. The session is disposed exactly once after the last test,
whatever the individual outcomes.

Locator names the session relies on:

- ``login.username``, ``login.password``, ``login.submit``
- ``dashboard.header`` (post-login marker)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from playwright.sync_api import Browser, BrowserContext, Error as PlaywrightError, Page

from harness import waits
from harness.errors import HarnessError, SetupFailure
from harness.interactions import Interactor, click, fill
from harness.locators import LocatorMap
from harness.workflow import WorkflowRunner

logger = logging.getLogger(__name__)

LOGIN_MARKER_LOCATOR = "dashboard.header"


class BrowserSession:
    """
    Owner of the browser context shared by an ordered test group.

    Attributes:
        context: The browser context this session owns.
        page: The single page every test drives.
        interactor: Wait-policy handle bound to ``page``.
        runner: Workflow runner bound to ``interactor``.
        settings: Configuration the session was created with.
    """

    def __init__(
        self,
        context: BrowserContext,
        page: Page,
        interactor: Interactor,
        settings: Any,
    ):
        self.context = context
        self.page = page
        self.interactor = interactor
        self.runner = WorkflowRunner(interactor)
        self.settings = settings
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    @classmethod
    def create(
        cls,
        browser: Browser,
        settings: Any,
        locators: LocatorMap,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "BrowserSession":
        """
        Open a context, log in and wait for the post-login marker.

        Args:
            browser: Launched Playwright browser.
            settings: Configuration class (see ``config.Config``).
            locators: Locator map containing the login and marker names.
            clock: Time source for waits.
            sleep: Blocking sleep for waits.

        Returns:
            A ready, authenticated session.

        Raises:
            SetupFailure: If any part of setup fails. Whatever was
                created before the failure is disposed first.
        """
        logger.info("Creating browser session for %s", settings.BASE_URL)
        try:
            context = browser.new_context(
                viewport=settings.VIEWPORT,
                ignore_https_errors=settings.IGNORE_HTTPS_ERRORS,
            )
        except PlaywrightError as exc:
            raise SetupFailure(f"Could not open a browser context: {exc}") from exc

        session = None
        try:
            page = context.new_page()
            interactor = Interactor(
                page,
                locators,
                timeout=settings.DEFAULT_TIMEOUT,
                poll_interval=settings.POLL_INTERVAL,
                settle_delay=settings.DIALOG_SETTLE_DELAY,
                clock=clock,
                sleep=sleep,
            )
            session = cls(context, page, interactor, settings)
            session.login(settings.USERNAME, settings.PASSWORD)
        except (HarnessError, PlaywrightError) as exc:
            if session is not None:
                session.dispose()
            else:
                _close_quietly(context)
            if isinstance(exc, SetupFailure):
                raise
            raise SetupFailure(f"Login failed: {exc}") from exc

        logger.info("Browser session ready as user %s", settings.USERNAME)
        return session

    def login(self, username: str, password: str) -> None:
        """
        Submit credentials and wait for the dashboard marker.

        Raises:
            SetupFailure: If the marker is missing or shows the wrong text.
        """
        settings = self.settings
        self.page.goto(settings.BASE_URL)
        self.interactor.run_steps(
            [
                fill("Enter username", "login.username", username),
                fill("Enter password", "login.password", password),
                click("Click login button", "login.submit"),
            ]
        )

        marker = self.interactor.find_optional(LOGIN_MARKER_LOCATOR)
        if marker is None:
            raise SetupFailure(
                f"Post-login marker '{LOGIN_MARKER_LOCATOR}' not displayed "
                f"within {settings.DEFAULT_TIMEOUT:g}s"
            )
        expected = settings.LOGIN_MARKER_TEXT
        if not self.interactor.wait_until(waits.element_text_equals(marker, expected)):
            raise SetupFailure(
                f"Login failed or {expected} not displayed "
                f"(marker text: {marker.inner_text().strip()!r})"
            )

    def dispose(self) -> None:
        """Close the browser context. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        logger.info("Disposing browser session")
        _close_quietly(self.context)

    def __enter__(self) -> "BrowserSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()


def _close_quietly(context: BrowserContext) -> None:
    try:
        context.close()
    except PlaywrightError as exc:
        logger.warning("Error while closing browser context: %s", exc)
