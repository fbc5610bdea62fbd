"""Models for case execution results."""

from collections.abc import Sequence
from dataclasses import dataclass

from backend_harness.suite.state import CaseState


@dataclass(frozen=True, kw_only=True)
class CaseResult:
    """Outcome of a single case run by the in-memory host."""

    name: str
    group_path: Sequence[str]
    state: CaseState
    duration: float
    message: str | None = None
