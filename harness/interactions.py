"""
Resilient element interactions.

The :class:`Interactor` is the wait-policy handle owned by a session.
Every interaction follows the same pattern: resolve a logical locator,
poll until the element is ready, then perform exactly one action. When
the element never becomes ready the failure names the logical step, the
locator and its selector, so a red test says *which* click broke.
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from playwright.sync_api import Error as PlaywrightError, Locator, Page

from harness import waits
from harness.errors import ElementNotFound, InteractionTimeout
from harness.locators import LocatorMap

logger = logging.getLogger(__name__)

# Logical name of the confirmation dialog's OK button in every locator file.
DIALOG_OK_LOCATOR = "dialog.ok"


class Action(str, enum.Enum):
    """Single action performed by an interaction step."""

    CLICK = "click"
    FILL = "fill"
    SELECT = "select"


class Readiness(str, enum.Enum):
    """How ready an element must be before acting on it."""

    READY = "ready"  # displayed and enabled
    PRESENT = "present"  # attached to the DOM


@dataclass(frozen=True)
class InteractionStep:
    """
    One locate-wait-act unit of a workflow.

    Attributes:
        description: Human-readable name used in failure messages.
        target: Logical locator name.
        action: What to do with the element once it is ready.
        value: Text for ``fill``; for ``select`` either an option label
            or a mapping of ``index``/``value``/``label``.
        require: Readiness the element must reach before the action.
    """

    description: str
    target: str
    action: Action = Action.CLICK
    value: Any = None
    require: Readiness = Readiness.READY

    def __post_init__(self):
        if self.action in (Action.FILL, Action.SELECT) and self.value is None:
            raise ValueError(f"Step '{self.description}' needs a value for {self.action.value}")


def click(description: str, target: str, require: Readiness = Readiness.READY) -> InteractionStep:
    """Build a click step."""
    return InteractionStep(description, target, Action.CLICK, require=require)


def fill(
    description: str, target: str, text: str, require: Readiness = Readiness.READY
) -> InteractionStep:
    """Build a clear-and-type step."""
    return InteractionStep(description, target, Action.FILL, str(text), require=require)


def select(
    description: str, target: str, option: Any, require: Readiness = Readiness.READY
) -> InteractionStep:
    """Build a select-option step."""
    return InteractionStep(description, target, Action.SELECT, option, require=require)


class Interactor:
    """
    Locate, wait for and act on elements of one page.

    Attributes:
        page: Playwright page (or anything with the same methods).
        locators: Logical-name to selector mapping.
        timeout: Default seconds to wait for an element.
        poll_interval: Seconds between readiness checks.
        settle_delay: Pause after each dismissed confirmation dialog.
    """

    def __init__(
        self,
        page: Page,
        locators: LocatorMap,
        timeout: float = 30.0,
        poll_interval: float = 0.5,
        settle_delay: float = 0.5,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.page = page
        self.locators = locators
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.settle_delay = settle_delay
        self._clock = clock
        self._sleep = sleep

    # -------------------------------------------------------------------------
    # Waiting
    # -------------------------------------------------------------------------

    def wait_until(self, condition: waits.Condition, timeout: float | None = None) -> Any:
        """Poll ``condition`` with this interactor's policy; None on timeout."""
        return waits.wait_until(
            condition,
            self.timeout if timeout is None else timeout,
            self.poll_interval,
            clock=self._clock,
            sleep=self._sleep,
        )

    def locate(self, name: str) -> Locator:
        """Resolve a logical locator name to a page locator."""
        return self.page.locator(self.locators[name]).first

    def _condition(self, locator: Locator, require: Readiness) -> waits.Condition:
        if require is Readiness.PRESENT:
            return waits.element_present(locator)
        return waits.element_ready(locator)

    def find_optional(
        self,
        name: str,
        require: Readiness = Readiness.READY,
        timeout: float | None = None,
    ) -> Locator | None:
        """Wait for an element, returning None when it never shows up."""
        return self.wait_until(self._condition(self.locate(name), require), timeout)

    def find(
        self,
        name: str,
        step: str | None = None,
        require: Readiness = Readiness.READY,
        timeout: float | None = None,
    ) -> Locator:
        """
        Wait for a mandatory element.

        Raises:
            ElementNotFound: If the element is not ready within the timeout.
        """
        element = self.find_optional(name, require, timeout)
        if element is None:
            raise ElementNotFound(
                step=step or f"Locate {name}",
                locator=name,
                selector=self.locators[name],
                timeout=self.timeout if timeout is None else timeout,
                requirement=require.value,
            )
        return element

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def run_step(self, step: InteractionStep) -> None:
        """Wait for the step's element, then perform its action."""
        logger.debug("Step: %s (%s)", step.description, step.target)
        element = self.find(step.target, step=step.description, require=step.require)

        try:
            if step.action is Action.CLICK:
                element.click()
            elif step.action is Action.FILL:
                element.fill(step.value)
            elif step.action is Action.SELECT:
                if isinstance(step.value, dict):
                    element.select_option(**step.value)
                else:
                    element.select_option(label=str(step.value))
        except PlaywrightError as exc:
            # Present but not actionable: hidden, detached or covered
            raise ElementNotFound(
                step=step.description,
                locator=step.target,
                selector=self.locators[step.target],
                requirement=f"actionable for {step.action.value}",
            ) from exc

    def run_steps(self, steps: Iterable[InteractionStep]) -> None:
        """Run steps in order, stopping at the first failure."""
        for step in steps:
            self.run_step(step)

    def click(self, name: str, step: str | None = None, require: Readiness = Readiness.READY) -> None:
        self.run_step(click(step or f"Click {name}", name, require))

    def fill(self, name: str, text: str, step: str | None = None) -> None:
        self.run_step(fill(step or f"Fill {name}", name, text))

    def select(self, name: str, option: Any, step: str | None = None) -> None:
        self.run_step(select(step or f"Select in {name}", name, option))

    # -------------------------------------------------------------------------
    # Confirmation dialogs
    # -------------------------------------------------------------------------

    def confirm_dialogs(self, count: int = 1, timeout: float | None = None) -> None:
        """
        Dismiss ``count`` confirmation dialogs one after another.

        The OK button is one fixed locator for every dialog. After each
        click the interactor pauses for ``settle_delay`` so the next
        dialog can render.

        Raises:
            InteractionTimeout: Naming the dialog index that never appeared.
        """
        if count < 0:
            raise ValueError("count must not be negative")

        button = self.locate(DIALOG_OK_LOCATOR)
        wait_seconds = self.timeout if timeout is None else timeout
        for index in range(1, count + 1):
            ok = self.wait_until(waits.element_present(button), wait_seconds)
            if ok is None:
                raise InteractionTimeout(
                    f"Confirmation dialog {index} of {count} was not found "
                    f"within {wait_seconds:g}s"
                )
            try:
                ok.click()
            except PlaywrightError as exc:
                raise InteractionTimeout(
                    f"Confirmation dialog {index} of {count} could not be dismissed: {exc}"
                ) from exc
            logger.info("Dismissed confirmation dialog %d of %d", index, count)
            self._sleep(self.settle_delay)

    # -------------------------------------------------------------------------
    # Page state
    # -------------------------------------------------------------------------

    def text_of(self, name: str, step: str | None = None) -> str:
        """Return the trimmed text of a mandatory element."""
        return self.find(name, step=step, require=Readiness.PRESENT).inner_text().strip()

    def page_contains(self, text: str, timeout: float | None = None) -> bool:
        """Wait for the page source to contain ``text``."""
        return bool(self.wait_until(waits.page_contains(self.page, text), timeout))

    def page_excludes(self, text: str, timeout: float | None = None) -> bool:
        """Wait for the page source to stop containing ``text``."""
        return bool(self.wait_until(waits.page_excludes(self.page, text), timeout))
