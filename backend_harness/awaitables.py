"""Helpers for calling functions that may or may not be coroutines."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any


async def resolve(operation: Callable[[], Any] | Awaitable[Any]) -> Any:
    """Invoke operation and await its result when it is awaitable."""
    result = operation if inspect.isawaitable(operation) else operation()
    if inspect.isawaitable(result):
        return await result
    return result
