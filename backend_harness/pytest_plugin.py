"""pytest plugin running marked test classes and modules as linear suites.

A linear suite is a test class (or module) marked with ``linear``::

    @linear_suite
    class TestBasic:
        def test_create(self) -> None: ...

        def test_read(self) -> None: ...

        class TestUpdate:
            def test_update(self) -> None: ...

Before each test of the suite, including tests of nested classes, the test is
skipped if a test collected directly in its own class, or directly in the
enclosing class or module, has already failed.
"""

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from backend_harness.settings import configure_logging
from backend_harness.suite.gate import apply_gate, chain_failed, skip_reason
from backend_harness.suite.state import CaseState

log = logging.getLogger(__name__)

LINEAR_MARKER = "linear"
PLUGIN_NAME = "backend-harness-linear"


def linear_suite[C: type](cls: C) -> C:
    """Mark a test class as a linear suite."""
    marked: C = getattr(pytest.mark, LINEAR_MARKER)(cls)
    return marked


def group_of(node: pytest.Item | pytest.Collector) -> pytest.Collector | None:
    """Return the class or module collector a node belongs to directly."""
    parent = node.parent
    if isinstance(parent, pytest.Class | pytest.Module):
        return parent
    return None


@dataclass(kw_only=True)
class OutcomeLedger:
    """Case states derived from pytest's own reports, keyed by node id."""

    members: defaultdict[str, list[str]] = field(
        default_factory=lambda: defaultdict(list)
    )
    states: dict[str, CaseState] = field(default_factory=dict)

    def add_member(self, group_id: str, nodeid: str) -> None:
        """Register a collected test under its group."""
        self.members[group_id].append(nodeid)

    def record(self, report: pytest.TestReport) -> None:
        """Fold a phase report into the case state.

        A failure in any phase (setup, call, teardown) makes the case failed
        for good. A skip only applies to a case with no outcome yet.
        """
        current = self.states.get(report.nodeid, "pending")
        if current == "failed":
            return
        if report.failed:
            self.states[report.nodeid] = "failed"
        elif report.skipped:
            if current == "pending":
                self.states[report.nodeid] = "skipped"
        elif report.when == "call":
            self.states[report.nodeid] = "passed"

    def group_states(self, group_id: str) -> Sequence[CaseState]:
        """States of the tests collected directly in the group."""
        return [
            self.states.get(nodeid, "pending")
            for nodeid in self.members.get(group_id, ())
        ]


@dataclass(frozen=True)
class ItemView:
    """SuiteStateView over the ledger for the test item about to run."""

    ledger: OutcomeLedger
    item: pytest.Item

    def query_ancestor_failed(self) -> bool:
        """Check the item's own group and that group's direct parent."""
        group = group_of(self.item)
        if group is None:
            return False
        parent = group_of(group)
        return chain_failed(
            self.ledger.group_states(group.nodeid),
            self.ledger.group_states(parent.nodeid) if parent is not None else None,
        )

    def mark_skipped(self) -> None:
        """Skip the item through pytest, which never returns."""
        group = group_of(self.item)
        pytest.skip(skip_reason(group.name if group is not None else self.item.name))


@dataclass(kw_only=True)
class LinearSuitePlugin:
    """Hooks gating the tests of linear suites on earlier failures."""

    report: bool = True
    ledger: OutcomeLedger = field(default_factory=OutcomeLedger)
    gated: dict[str, list[str]] = field(default_factory=lambda: defaultdict(list))

    @pytest.hookimpl(trylast=True)
    def pytest_collection_modifyitems(self, items: list[pytest.Item]) -> None:
        """Record which tests belong directly to which class or module."""
        for item in items:
            if (group := group_of(item)) is not None:
                self.ledger.add_member(group.nodeid, item.nodeid)

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_setup(self, item: pytest.Item) -> None:
        """Skip the test before its fixtures are set up if its chain failed."""
        if item.get_closest_marker(LINEAR_MARKER) is None:
            return

        try:
            apply_gate(ItemView(self.ledger, item))
        except pytest.skip.Exception:
            group = group_of(item)
            self.gated[group.nodeid if group is not None else ""].append(item.nodeid)
            log.info("Skipped %s after earlier failure", item.nodeid)
            raise

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        """Track case outcomes exactly as pytest reports them."""
        self.ledger.record(report)

    def pytest_terminal_summary(
        self, terminalreporter: pytest.TerminalReporter
    ) -> None:
        """Summarize the tests skipped by linear suites."""
        if not self.report or not self.gated:
            return

        terminalreporter.section("linear suites")
        for group_id, nodeids in self.gated.items():
            terminalreporter.write_line(
                f"⏭ {group_id}: {len(nodeids)} test(s) skipped after earlier failure"
            )


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options of the plugin."""
    parser.addini(
        "linear_suite_report",
        type="bool",
        default=True,
        help="Summarize tests skipped by linear suites at the end of the run",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the marker and the gating hooks."""
    config.addinivalue_line(
        "markers",
        f"{LINEAR_MARKER}: run the tests of a class or module in order and skip "
        "the rest once one has failed",
    )
    configure_logging()
    if not config.pluginmanager.has_plugin(PLUGIN_NAME):
        config.pluginmanager.register(
            LinearSuitePlugin(report=config.getini("linear_suite_report")),
            PLUGIN_NAME,
        )
