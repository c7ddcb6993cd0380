"""
Blocking wrappers over the async operations.

Every synchronous method in the package is written as ``run_sync(self.op_async, ...)``
so that the way results and failures reach synchronous callers is defined once.
"""

import asyncio
from collections.abc import Awaitable, Callable
from concurrent.futures import ThreadPoolExecutor
from functools import cache
from typing import Any, TypeVar

T = TypeVar("T")


@cache
def _executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(thread_name_prefix="media-services")


def innermost_exception(error: BaseException) -> BaseException:
    """
    Reduce a wrapping exception to the single failure that caused it.

    Exception groups holding exactly one exception are unwrapped recursively.
    Groups with several members, and plain exceptions, are returned unchanged.

    Args:
        error: Exception raised by an async operation.

    Returns:
        The originating exception.
    """
    while isinstance(error, BaseExceptionGroup) and len(error.exceptions) == 1:
        error = error.exceptions[0]
    return error


def run_sync(func: Callable[..., Awaitable[T]], /, *args: Any, **kwargs: Any) -> T:
    """
    Run an async operation to completion and return its result.

    The operation runs on a worker thread with its own event loop, so this
    can be called from plain threads and from code already running inside
    an event loop alike.

    Args:
        func: Coroutine function implementing the operation.
        *args: Positional arguments for ``func``.
        **kwargs: Keyword arguments for ``func``.

    Returns:
        Whatever the operation returns.

    Raises:
        BaseException: The originating failure, never a wrapping group.
    """

    async def _invoke() -> T:
        return await func(*args, **kwargs)

    future = _executor().submit(asyncio.run, _invoke())
    try:
        return future.result()
    except BaseExceptionGroup as group:
        raise innermost_exception(group) from None
