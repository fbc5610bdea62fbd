"""Assertions for operations that are expected to fail."""

import re
from collections.abc import Awaitable, Callable
from typing import Any, Literal

from backend_harness.awaitables import resolve

type RejectionKind = Literal["unexpected-success", "wrong-error"]
type ErrorMatcher = type[Exception] | tuple[type[Exception], ...]


class RejectionAssertionError(AssertionError):
    """Raised when an expected rejection did not happen as expected."""

    kind: RejectionKind


class UnexpectedSuccessError(RejectionAssertionError):
    """The operation completed instead of raising."""

    kind: RejectionKind = "unexpected-success"


class RejectionMismatchError(RejectionAssertionError):
    """The operation raised an error that does not match the signature."""

    kind: RejectionKind = "wrong-error"


def error_matches(
    error: BaseException,
    expected: ErrorMatcher,
    match: str | re.Pattern[str] | None = None,
) -> bool:
    """Check an error against a type and an optional message matcher.

    A string matcher must be a substring of the error message, a compiled
    pattern must be found in it.
    """
    if not isinstance(error, expected):
        return False
    if match is None:
        return True
    if isinstance(match, re.Pattern):
        return match.search(str(error)) is not None
    return match in str(error)


async def expect_reject(
    operation: Callable[[], Any] | Awaitable[Any],
    expected: ErrorMatcher = Exception,
    match: str | re.Pattern[str] | None = None,
    msg: str | None = None,
) -> Exception:
    """Await operation and assert that it raises a matching error.

    Args:
        operation: Zero-argument callable (sync or async) or an awaitable
        expected: Error class or tuple of classes the error must be an
            instance of
        match: Substring, or compiled pattern, the error message must contain
        msg: Prefix for the failure message

    Returns:
        The caught error

    Raises:
        UnexpectedSuccessError: If the operation did not raise
        RejectionMismatchError: If the error does not match, chained from it

    """
    prefix = f"{msg}: " if msg else ""

    try:
        result = await resolve(operation)
    except Exception as error:
        if not error_matches(error, expected, match):
            raise RejectionMismatchError(
                f"{prefix}expected {_describe(expected, match)}, "
                f"got {type(error).__name__}: {error}"
            ) from error
        return error

    raise UnexpectedSuccessError(
        f"{prefix}expected {_describe(expected, match)}, "
        f"but operation succeeded with {result!r}"
    )


def _describe(expected: ErrorMatcher, match: str | re.Pattern[str] | None) -> str:
    classes = expected if isinstance(expected, tuple) else (expected,)
    names = " or ".join(cls.__name__ for cls in classes)
    if match is None:
        return f"rejection with {names}"
    pattern = match.pattern if isinstance(match, re.Pattern) else match
    return f"rejection with {names} matching {pattern!r}"
