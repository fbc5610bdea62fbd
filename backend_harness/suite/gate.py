"""Skip gate evaluated before every case of a linear suite."""

import logging
from collections.abc import Iterable

from backend_harness.suite.state import CaseState, SuiteStateView

log = logging.getLogger(__name__)

SKIP_REASON = "linear suite {group}: skipped after earlier failure"


def any_failed(states: Iterable[CaseState]) -> bool:
    """Check if any of the given case states is a failure."""
    return any(state == "failed" for state in states)


def chain_failed(
    current: Iterable[CaseState],
    parent: Iterable[CaseState] | None,
) -> bool:
    """Decide whether the next case of a group must be skipped.

    Only the current group and its direct parent are inspected. A failure in
    a grandparent group does not reach a grandchild whose parent passed.

    Args:
        current: States of the cases registered directly in the current group
        parent: States of the cases registered directly in the parent group,
            or None when the current group is a root group

    Returns:
        True if any of those cases has failed

    """
    if any_failed(current):
        return True
    return parent is not None and any_failed(parent)


def apply_gate(view: SuiteStateView) -> bool:
    """Skip the pending case if its chain already holds a failure.

    Returns:
        True if the case was marked skipped

    """
    if not view.query_ancestor_failed():
        return False

    log.debug("Earlier failure in chain, skipping case")
    view.mark_skipped()
    return True


def skip_reason(group_name: str) -> str:
    """Build the skip reason reported for a gated case."""
    return SKIP_REASON.format(group=group_name)
