"""Linear suites: ordered groups that stop after the first failure."""

import logging
from collections.abc import Callable

from backend_harness.suite.gate import apply_gate
from backend_harness.suite.registry import BeforeEachHook, Group, TestRegistry
from backend_harness.suite.state import SuiteStateView

log = logging.getLogger(__name__)


def linear_suite(
    registry: TestRegistry,
    name: str,
    setup: Callable[[Group], None],
    *,
    parent: Group | None = None,
) -> Group:
    """Register a group whose cases are skipped once an earlier one failed.

    Cases run in declaration order. Before each case of the group, or of a
    group nested in it, the gate checks the case's own group and that group's
    direct parent. If either already has a failed case, the case is skipped
    without running its body.

    Args:
        registry: Host the group is registered with
        name: Group name
        setup: Declares the group's cases and nested groups
        parent: Enclosing group, None for a root group

    Returns:
        The registered group

    """
    group = registry.group(name, parent)
    registry.before_each(group, _gate_hook(name))
    setup(group)
    log.debug("Registered linear suite %s with %d case(s)", name, len(group.cases))
    return group


def _gate_hook(name: str) -> BeforeEachHook:
    def _gate(view: SuiteStateView) -> None:
        if apply_gate(view):
            log.info("Skipped case in linear suite %s after earlier failure", name)

    return _gate
