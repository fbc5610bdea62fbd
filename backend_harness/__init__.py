"""Integration-test harness for RPC backends with linear test suites."""

from backend_harness.assertions import (
    RejectionAssertionError,
    RejectionMismatchError,
    UnexpectedSuccessError,
    expect_reject,
)
from backend_harness.suite.linear import linear_suite

__all__ = [
    "RejectionAssertionError",
    "RejectionMismatchError",
    "UnexpectedSuccessError",
    "expect_reject",
    "linear_suite",
]
