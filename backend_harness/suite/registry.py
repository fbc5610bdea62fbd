"""Registration API shared by the hosts a linear suite can run on."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass, field

from backend_harness.suite.state import CaseState, SuiteStateView

type CaseBody = Callable[[], Awaitable[None] | None]
type BeforeEachHook = Callable[[SuiteStateView], None]


@dataclass(eq=False, kw_only=True)
class Case:
    """A registered case and its result state."""

    __test__ = False

    name: str
    group: "Group" = field(repr=False)
    body: CaseBody = field(repr=False)
    state: CaseState = "pending"


@dataclass(eq=False, kw_only=True)
class Group:
    """An ordered collection of cases and nested groups."""

    name: str
    parent: "Group | None" = field(default=None, repr=False)
    cases: list[Case] = field(default_factory=list)
    children: list["Group"] = field(default_factory=list)
    hooks: list[BeforeEachHook] = field(default_factory=list, repr=False)

    @property
    def path(self) -> Sequence[str]:
        """Names from the root group down to this one."""
        return tuple(reversed([group.name for group in self.chain()]))

    def chain(self) -> Iterator["Group"]:
        """Iterate from this group outwards to the root."""
        group: Group | None = self
        while group is not None:
            yield group
            group = group.parent

    def states(self) -> Sequence[CaseState]:
        """States of the cases registered directly in this group."""
        return [case.state for case in self.cases]


class TestRegistry(ABC):
    """Host capability to register groups, cases and before-each hooks."""

    __test__ = False

    @abstractmethod
    def group(self, name: str, parent: Group | None = None) -> Group:
        """Register a named group, nested under parent when given."""

    @abstractmethod
    def case(self, group: Group, name: str, body: CaseBody) -> Case:
        """Register a named case at the end of the group."""

    @abstractmethod
    def before_each(self, group: Group, hook: BeforeEachHook) -> None:
        """Run hook before every case of the group and of its nested groups."""

    @abstractmethod
    def states(self, group: Group) -> Sequence[CaseState]:
        """States of the cases registered directly in the group."""
