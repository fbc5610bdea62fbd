"""Case states and the view through which the gate reads them."""

from typing import Literal, Protocol

type CaseState = Literal["pending", "passed", "failed", "skipped"]


class SuiteStateView(Protocol):
    """State of the execution chain as seen by the case about to run.

    Hosts implement this over their own outcome bookkeeping so the gate never
    reaches into host internals.
    """

    def query_ancestor_failed(self) -> bool:
        """Return whether the current group or its direct parent has a failed case."""
        ...

    def mark_skipped(self) -> None:
        """Mark the current case as skipped so its body never runs.

        Hosts whose skip mechanism is an exception (pytest) raise from here.
        """
        ...
