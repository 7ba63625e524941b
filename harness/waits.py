"""
Poll-until-ready waits.

A wait repeatedly evaluates a condition against the current page until
the condition returns something truthy or the timeout elapses. Waits
block the calling thread; there is no cancellation beyond the timeout.

Boundary behaviour: the condition is evaluated immediately, after every
poll interval, and once more at the deadline itself (the last sleep is
clipped to the remaining time). A condition that first holds at exactly
``timeout`` seconds therefore counts as a success.

Conditions are plain callables taking no arguments. The factories in
this module build the ones the suite needs from Playwright locators and
pages; any object with the same methods works, which is what the unit
tests rely on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from playwright.sync_api import Error as PlaywrightError, Locator, Page

from harness.errors import HarnessError, InteractionTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

Condition = Callable[[], Any]

# Upper bound for a single enabled-state probe, so a detached element
# cannot stall one poll for Playwright's default 30s actionability wait.
PROBE_TIMEOUT_MS = 250


def wait_until(
    condition: Callable[[], T],
    timeout: float,
    poll_interval: float = 0.5,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T | None:
    """
    Evaluate ``condition`` until it returns a truthy value.

    Args:
        condition: Zero-argument callable. Driver errors it raises are
            treated as "not ready yet".
        timeout: Seconds to keep polling.
        poll_interval: Seconds between evaluations.
        clock: Monotonic time source.
        sleep: Blocking sleep used between evaluations.

    Returns:
        The first truthy result, or None when the timeout elapsed.
    """
    if timeout < 0:
        raise ValueError("timeout must not be negative")
    if poll_interval <= 0:
        raise ValueError("poll_interval must be positive")

    deadline = clock() + timeout
    while True:
        try:
            result = condition()
        except PlaywrightError as exc:
            logger.debug("Condition raised driver error, polling again: %s", exc)
            result = None
        if result:
            return result

        remaining = deadline - clock()
        if remaining <= 0:
            return None
        sleep(min(poll_interval, remaining))


def wait_for(
    condition: Callable[[], T],
    timeout: float,
    poll_interval: float = 0.5,
    message: str = "Condition not met",
    *,
    exc: type[HarnessError] = InteractionTimeout,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Like :func:`wait_until` but raise ``exc`` when the timeout elapses."""
    result = wait_until(condition, timeout, poll_interval, clock=clock, sleep=sleep)
    if not result:
        raise exc(f"{message} within {timeout:g}s")
    return result


# -----------------------------------------------------------------------------
# Condition factories
# -----------------------------------------------------------------------------

def element_present(locator: Locator) -> Condition:
    """Satisfied by the locator once it matches at least one element."""

    def _check() -> Locator | None:
        return locator if locator.count() > 0 else None

    return _check


def element_visible(locator: Locator) -> Condition:
    """Satisfied by the locator once the element is displayed."""

    def _check() -> Locator | None:
        if locator.count() == 0:
            return None
        return locator if locator.is_visible() else None

    return _check


def element_ready(locator: Locator) -> Condition:
    """Satisfied by the locator once the element is displayed and enabled."""

    def _check() -> Locator | None:
        if locator.count() == 0 or not locator.is_visible():
            return None
        return locator if locator.is_enabled(timeout=PROBE_TIMEOUT_MS) else None

    return _check


def element_text_equals(locator: Locator, expected: str) -> Condition:
    """Satisfied once the element's trimmed text equals ``expected``."""

    def _check() -> bool:
        return locator.count() > 0 and locator.inner_text().strip() == expected

    return _check


def element_text_contains(locator: Locator, expected: str) -> Condition:
    """Satisfied once the element's text contains ``expected``."""

    def _check() -> bool:
        return locator.count() > 0 and expected in locator.inner_text()

    return _check


def page_contains(page: Page, text: str) -> Condition:
    """Satisfied once the page source contains ``text``."""
    return lambda: text in page.content()


def page_excludes(page: Page, text: str) -> Condition:
    """Satisfied once the page source no longer contains ``text``."""
    return lambda: text not in page.content()
