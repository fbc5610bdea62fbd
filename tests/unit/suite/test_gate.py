"""Tests for the linear suite gate."""

from dataclasses import dataclass

import pytest

from backend_harness.suite.gate import apply_gate, chain_failed, skip_reason
from backend_harness.suite.state import CaseState


@dataclass(kw_only=True)
class FakeView:
    """SuiteStateView with a fixed answer that counts skip calls."""

    failed: bool
    state: CaseState = "pending"
    skip_calls: int = 0

    def query_ancestor_failed(self) -> bool:
        """Return the configured answer."""
        return self.failed

    def mark_skipped(self) -> None:
        """Record the skip without revisiting an outcome."""
        self.skip_calls += 1
        if self.state == "pending":
            self.state = "skipped"


class TestChainFailed:
    """Tests for chain_failed."""

    @pytest.mark.parametrize(
        ("current", "parent", "expected"),
        [
            ([], None, False),
            (["passed", "passed"], None, False),
            (["passed", "failed"], None, True),
            (["passed"], ["passed", "skipped"], False),
            (["passed"], ["passed", "failed"], True),
            ([], ["failed"], True),
            (["skipped", "pending"], ["skipped"], False),
        ],
    )
    def test_inspects_current_and_parent(
        self,
        current: list[CaseState],
        parent: list[CaseState] | None,
        expected: bool,
    ) -> None:
        """Fails when either the current or the parent group has a failure."""
        assert chain_failed(current, parent) is expected

    def test_root_group_only_checks_current(self) -> None:
        """A root group has no parent to inspect."""
        assert chain_failed(["passed"], None) is False


class TestApplyGate:
    """Tests for apply_gate."""

    def test_leaves_case_pending_without_failure(self) -> None:
        """Does not skip when nothing in the chain failed."""
        view = FakeView(failed=False)

        assert apply_gate(view) is False
        assert view.state == "pending"
        assert view.skip_calls == 0

    def test_skips_case_after_failure(self) -> None:
        """Marks the case skipped when the chain holds a failure."""
        view = FakeView(failed=True)

        assert apply_gate(view) is True
        assert view.state == "skipped"

    def test_reapplying_keeps_case_skipped(self) -> None:
        """Evaluating the gate again leaves a skipped case skipped."""
        view = FakeView(failed=True)

        apply_gate(view)
        apply_gate(view)

        assert view.state == "skipped"


def test_skip_reason_names_group() -> None:
    """Skip reason names the group of the skipped case."""
    assert skip_reason("Basic") == "linear suite Basic: skipped after earlier failure"
