"""
Multi-step workflow execution.

A workflow is one user-visible operation (add a category, edit a
wallet, ...) expressed as data: where to navigate, which marker proves
the page is ready, the ordered interaction steps, how many confirmation
dialogs follow, and the post-conditions that prove it worked.
Preconditions are checked once the page is ready, before any step runs.

Execution is a small state machine::

    IDLE -> PAGE_READY -> STEPPING -> AWAITING_CONFIRMATION -> VERIFIED
                                                            \\-> FAILED

Any error moves the runner to FAILED and is re-raised unchanged. There
are no retries beyond the poll already embedded in each wait.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from harness import waits
from harness.errors import AssertionFailure
from harness.interactions import InteractionStep, Interactor

logger = logging.getLogger(__name__)


class WorkflowState(str, enum.Enum):
    IDLE = "idle"
    PAGE_READY = "page_ready"
    STEPPING = "stepping"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    VERIFIED = "verified"
    FAILED = "failed"


class Check(str, enum.Enum):
    """Kinds of post-condition a workflow can verify."""

    PAGE_CONTAINS = "page_contains"
    PAGE_EXCLUDES = "page_excludes"
    TEXT_EQUALS = "text_equals"
    TEXT_CONTAINS = "text_contains"
    VISIBLE = "visible"


@dataclass(frozen=True)
class Expectation:
    """
    A post-condition checked after the workflow's actions.

    ``target`` is a locator name for element checks and unused for page
    checks. ``timeout`` overrides the interactor default.
    """

    check: Check
    expected: str = ""
    target: str | None = None
    timeout: float | None = None
    message: str | None = None

    @classmethod
    def page_contains(cls, text: str, **kwargs) -> "Expectation":
        return cls(Check.PAGE_CONTAINS, text, **kwargs)

    @classmethod
    def page_excludes(cls, text: str, **kwargs) -> "Expectation":
        return cls(Check.PAGE_EXCLUDES, text, **kwargs)

    @classmethod
    def text_equals(cls, target: str, text: str, **kwargs) -> "Expectation":
        return cls(Check.TEXT_EQUALS, text, target=target, **kwargs)

    @classmethod
    def text_contains(cls, target: str, text: str, **kwargs) -> "Expectation":
        return cls(Check.TEXT_CONTAINS, text, target=target, **kwargs)

    @classmethod
    def visible(cls, target: str, **kwargs) -> "Expectation":
        return cls(Check.VISIBLE, target=target, **kwargs)

    def describe(self) -> str:
        if self.message:
            return self.message
        if self.check is Check.PAGE_CONTAINS:
            return f"Page does not contain '{self.expected}'"
        if self.check is Check.PAGE_EXCLUDES:
            return f"Page still contains '{self.expected}'"
        if self.check is Check.TEXT_EQUALS:
            return f"Text of '{self.target}' is not '{self.expected}'"
        if self.check is Check.TEXT_CONTAINS:
            return f"Text of '{self.target}' does not contain '{self.expected}'"
        return f"Element '{self.target}' is not visible"


@dataclass
class Workflow:
    """Declarative description of one user-visible operation."""

    name: str
    steps: list[InteractionStep] = field(default_factory=list)
    navigate: str | None = None
    page_marker: str | None = None
    confirmations: int = 0
    expectations: list[Expectation] = field(default_factory=list)
    preconditions: list[Expectation] = field(default_factory=list)

    def __post_init__(self):
        if self.confirmations < 0:
            raise ValueError("confirmations must not be negative")


class WorkflowRunner:
    """Execute workflows against one interactor, tracking state."""

    def __init__(self, interactor: Interactor):
        self.interactor = interactor
        self.state = WorkflowState.IDLE
        self.history: list[WorkflowState] = [WorkflowState.IDLE]

    def _enter(self, workflow: Workflow, state: WorkflowState) -> None:
        self.state = state
        self.history.append(state)
        logger.info("Workflow '%s': %s", workflow.name, state.value)

    def run(self, workflow: Workflow) -> WorkflowState:
        """
        Run ``workflow`` to completion.

        Returns:
            WorkflowState.VERIFIED on success.

        Raises:
            ElementNotFound, InteractionTimeout, AssertionFailure: On the
                first unrecoverable step, after entering FAILED.
        """
        self.state = WorkflowState.IDLE
        self.history = [WorkflowState.IDLE]
        try:
            if workflow.navigate:
                self.interactor.click(workflow.navigate, step=f"{workflow.name}: open page")
            if workflow.page_marker:
                self.interactor.find(
                    workflow.page_marker,
                    step=f"{workflow.name}: wait for page",
                )
            self._enter(workflow, WorkflowState.PAGE_READY)
            for precondition in workflow.preconditions:
                self.verify(precondition)

            self._enter(workflow, WorkflowState.STEPPING)
            self.interactor.run_steps(workflow.steps)

            self._enter(workflow, WorkflowState.AWAITING_CONFIRMATION)
            self.interactor.confirm_dialogs(workflow.confirmations)

            for expectation in workflow.expectations:
                self.verify(expectation)
        except Exception:
            self._enter(workflow, WorkflowState.FAILED)
            raise

        self._enter(workflow, WorkflowState.VERIFIED)
        return self.state

    def verify(self, expectation: Expectation) -> None:
        """
        Wait for one post-condition.

        Raises:
            AssertionFailure: If the condition does not hold in time.
        """
        interactor = self.interactor
        check = expectation.check

        if check is Check.PAGE_CONTAINS:
            condition = waits.page_contains(interactor.page, expectation.expected)
        elif check is Check.PAGE_EXCLUDES:
            condition = waits.page_excludes(interactor.page, expectation.expected)
        else:
            locator = interactor.locate(expectation.target)
            if check is Check.TEXT_EQUALS:
                condition = waits.element_text_equals(locator, expectation.expected)
            elif check is Check.TEXT_CONTAINS:
                condition = waits.element_text_contains(locator, expectation.expected)
            else:
                condition = waits.element_visible(locator)

        if not interactor.wait_until(condition, expectation.timeout):
            raise AssertionFailure(expectation.describe())
