"""
SpendWise UI harness.

Reusable core for the browser-driven regression suite: an ordered,
shared login session and a poll-until-ready interaction protocol.
Application-specific locators and workflows live with the tests.
"""

from __future__ import annotations

import logging

from harness.errors import (
    AssertionFailure,
    ElementNotFound,
    HarnessError,
    InteractionTimeout,
    LocatorError,
    SetupFailure,
)
from harness.interactions import InteractionStep, Interactor
from harness.locators import LocatorMap
from harness.session import BrowserSession
from harness.waits import wait_for, wait_until
from harness.workflow import Expectation, Workflow, WorkflowRunner, WorkflowState


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

__all__ = [
    "AssertionFailure",
    "BrowserSession",
    "ElementNotFound",
    "Expectation",
    "HarnessError",
    "InteractionStep",
    "InteractionTimeout",
    "Interactor",
    "LocatorError",
    "LocatorMap",
    "SetupFailure",
    "Workflow",
    "WorkflowRunner",
    "WorkflowState",
    "wait_for",
    "wait_until",
]
