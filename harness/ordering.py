"""
Priority ordering for dependent test groups (pytest plugin).

Tests in a sequential group share one browser session and one mutable
application state: a category created by one test is edited by the
next. They must therefore run one after another, in ascending priority
order, and never in parallel.

Usage::

    pytestmark = pytest.mark.sequential("spendwise")

    @pytest.mark.priority(1)
    def test_login(...): ...

Rules:

- Items are grouped by the name given to ``sequential``.
- Within a group items are stable-sorted by priority (unmarked items
  count as 0), so ties keep declaration order.
- Each group is re-laid into the slots its items already occupied;
  items outside any group keep their positions.
- With pytest-xdist, only ``--dist loadgroup`` is accepted, and every
  group item is pinned to one worker through ``xdist_group``.

The plugin is registered from the root ``conftest.py``.
"""

from __future__ import annotations

import logging
from collections import defaultdict

import pytest

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 0
DEFAULT_GROUP = "default"

# xdist distribution modes that keep a marked group on a single worker
_SERIAL_DIST_MODES = {"no", "loadgroup"}


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "priority(n): run order within a sequential group (lower runs first)",
    )
    config.addinivalue_line(
        "markers",
        "sequential(name): members share state and run in priority order, never in parallel",
    )


def group_of(item: pytest.Item) -> str | None:
    """Return the sequential group name of ``item``, or None."""
    marker = item.get_closest_marker("sequential")
    if marker is None:
        return None
    return str(marker.args[0]) if marker.args else DEFAULT_GROUP


def priority_of(item: pytest.Item) -> int:
    """Return the declared priority of ``item``."""
    marker = item.get_closest_marker("priority")
    if marker is None:
        return DEFAULT_PRIORITY

    value = marker.args[0] if marker.args else marker.kwargs.get("order")
    # bool is an int subclass but never a meaningful priority
    if not isinstance(value, int) or isinstance(value, bool):
        raise pytest.UsageError(
            f"{item.nodeid}: priority marker needs an integer, got {value!r}"
        )
    return value


def order_by_priority(items: list[pytest.Item]) -> list[pytest.Item]:
    """
    Reorder each sequential group by priority, in place of its own slots.

    Args:
        items: Collected items in collection order.

    Returns:
        A new list with the same items.
    """
    slots: dict[str, list[int]] = defaultdict(list)
    for index, item in enumerate(items):
        group = group_of(item)
        if group is not None:
            slots[group].append(index)

    ordered = list(items)
    for group, indexes in slots.items():
        members = sorted((items[i] for i in indexes), key=priority_of)
        for index, item in zip(indexes, members):
            ordered[index] = item
        logger.debug(
            "Sequential group '%s': %s",
            group,
            ", ".join(item.name for item in members),
        )
    return ordered


def _check_parallelism(config: pytest.Config, items: list[pytest.Item]) -> None:
    numprocesses = config.getoption("numprocesses", None)
    if not numprocesses:
        return

    dist = config.getoption("dist", "no")
    if dist not in _SERIAL_DIST_MODES:
        raise pytest.UsageError(
            "Sequential test groups cannot run with --dist "
            f"{dist}; use --dist loadgroup or disable xdist"
        )
    for item in items:
        group = group_of(item)
        if group is not None:
            item.add_marker(pytest.mark.xdist_group(f"sequential-{group}"))


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    session: pytest.Session, config: pytest.Config, items: list[pytest.Item]
) -> None:
    if not any(group_of(item) is not None for item in items):
        return
    _check_parallelism(config, items)
    items[:] = order_by_priority(items)
