"""In-memory host that runs registered cases one after another."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from backend_harness.awaitables import resolve
from backend_harness.models.result import CaseResult
from backend_harness.suite.gate import chain_failed
from backend_harness.suite.registry import (
    BeforeEachHook,
    Case,
    CaseBody,
    Group,
    TestRegistry,
)
from backend_harness.suite.state import CaseState

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaseView:
    """SuiteStateView over the registry's state for a single case."""

    registry: TestRegistry
    case: Case

    def query_ancestor_failed(self) -> bool:
        """Check the case's own group and that group's direct parent."""
        group = self.case.group
        parent = (
            self.registry.states(group.parent) if group.parent is not None else None
        )
        return chain_failed(self.registry.states(group), parent)

    def mark_skipped(self) -> None:
        """Skip the case unless it already has an outcome."""
        if self.case.state == "pending":
            self.case.state = "skipped"


@dataclass(kw_only=True)
class SequentialRegistry(TestRegistry):
    """Registers groups in memory and runs their cases sequentially.

    A group's own cases run first, in declaration order, followed by its
    nested groups in declaration order.
    """

    roots: list[Group] = field(default_factory=list)
    _groups: set[Group] = field(default_factory=set, init=False, repr=False)
    _ran: bool = field(default=False, init=False, repr=False)

    def group(self, name: str, parent: Group | None = None) -> Group:
        """Register a group at the end of its parent or of the root list.

        Raises:
            RuntimeError: If the registry has already been run
            KeyError: If parent was not registered with this registry

        """
        if self._ran:
            raise RuntimeError(f"Cannot register group {name!r} after the run")
        if parent is not None:
            self._check_registered(parent)
        group = Group(name=name, parent=parent)
        siblings = parent.children if parent is not None else self.roots
        siblings.append(group)
        self._groups.add(group)
        return group

    def case(self, group: Group, name: str, body: CaseBody) -> Case:
        """Register a case at the end of the group."""
        if self._ran:
            raise RuntimeError(f"Cannot register case {name!r} after the run")
        self._check_registered(group)
        case = Case(name=name, group=group, body=body)
        group.cases.append(case)
        return case

    def before_each(self, group: Group, hook: BeforeEachHook) -> None:
        """Attach a hook to the group and its nested groups."""
        self._check_registered(group)
        group.hooks.append(hook)

    def states(self, group: Group) -> Sequence[CaseState]:
        """States of the cases registered directly in the group."""
        self._check_registered(group)
        return group.states()

    def _check_registered(self, group: Group) -> None:
        if group not in self._groups:
            raise KeyError(
                f"Group {group.name!r} is not registered with this registry"
            )

    async def run(self) -> Sequence[CaseResult]:
        """Run every registered case and return their results in run order.

        Raises:
            RuntimeError: If the registry has already been run

        """
        if self._ran:
            raise RuntimeError("Registry has already been run")
        self._ran = True

        log.info("Running %d root group(s)...", len(self.roots))
        results: list[CaseResult] = []
        for group in self.roots:
            await self._run_group(group, results)

        log.info(
            "Run completed: passed=%d failed=%d skipped=%d",
            sum(1 for r in results if r.state == "passed"),
            sum(1 for r in results if r.state == "failed"),
            sum(1 for r in results if r.state == "skipped"),
        )
        return results

    async def _run_group(self, group: Group, results: list[CaseResult]) -> None:
        for case in group.cases:
            results.append(await self._run_case(case))
        for child in group.children:
            await self._run_group(child, results)

    async def _run_case(self, case: Case) -> CaseResult:
        """Run hooks then the body, recording the outcome on the case."""
        view = CaseView(self, case)
        loop = asyncio.get_running_loop()
        start = loop.time()
        message: str | None = None

        try:
            for hook in self._hooks_for(case.group):
                hook(view)
                if case.state == "skipped":
                    break
            if case.state == "pending":
                await resolve(case.body)
        except Exception as error:
            case.state = "failed"
            message = str(error)
            log.info("Case failed: %s: %s", case.name, error, exc_info=error)
        else:
            if case.state == "pending":
                case.state = "passed"

        duration = loop.time() - start
        log.info(
            "Case completed: group=%s case=%s state=%s duration=%.3fs",
            "/".join(case.group.path),
            case.name,
            case.state,
            duration,
        )
        return CaseResult(
            name=case.name,
            group_path=case.group.path,
            state=case.state,
            duration=duration,
            message=message,
        )

    @staticmethod
    def _hooks_for(group: Group) -> Sequence[BeforeEachHook]:
        """Hooks of the group and every enclosing group, outermost first."""
        return [hook for g in reversed(list(group.chain())) for hook in g.hooks]
