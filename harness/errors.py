"""
Failure taxonomy for browser-driven tests.

Every failure raised by the harness names the logical step that broke,
not just the driver error underneath, because most steps look alike
("wait, click, wait, type") but mean different things.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Base exception for all harness failures."""


class SetupFailure(HarnessError):
    """The shared session could not be established (browser, app or login)."""


class ElementNotFound(HarnessError):
    """A targeted element never became ready within its timeout."""

    def __init__(
        self,
        step: str,
        locator: str,
        selector: str | None = None,
        timeout: float | None = None,
        requirement: str = "ready",
    ):
        self.step = step
        self.locator = locator
        self.selector = selector
        self.timeout = timeout
        self.requirement = requirement

        message = f"Step '{step}' failed: element '{locator}'"
        if selector:
            message += f" ({selector})"
        message += f" was not {requirement}"
        if timeout is not None:
            message += f" within {timeout:g}s"
        super().__init__(message)


class InteractionTimeout(HarnessError):
    """A confirmation dialog or multi-step action did not complete in time."""


class AssertionFailure(HarnessError, AssertionError):
    """A workflow ran but the page did not reach the expected state."""


class LocatorError(HarnessError, KeyError):
    """A locator name is unknown or the locator file is malformed."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""
