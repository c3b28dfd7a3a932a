"""Decorators for API client calls.

This module provides decorators that make sure the client holds a login
session before a request is sent, so callers do not need to call
``login()`` themselves.
"""

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar

_logger = logging.getLogger(__name__)

# Type variable for async functions
F = TypeVar("F", bound=Callable[..., Any])


def requires_authentication(func: F) -> F:
    """Decorator that logs in before executing a client call.

    The decorated method must belong to an object with an
    ``is_authenticated`` attribute and an async ``login()`` method. If the
    client is not authenticated yet, ``login()`` is awaited once before the
    call; a failing login propagates its exception and the call is not
    made.

    Raises:
        TypeError: If applied to a function that is not async.

    Example:
        >>> class MyClient:
        ...     is_authenticated = False
        ...
        ...     async def login(self):
        ...         self.is_authenticated = True
        ...
        ...     @requires_authentication
        ...     async def query_boxes(self):
        ...         return await self._make_request(...)
    """
    if not inspect.iscoroutinefunction(func):
        raise TypeError(
            f"{func.__name__} must be async to use requires_authentication"
        )

    @functools.wraps(func)
    async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        if not self.is_authenticated:
            _logger.info(
                f"Not logged in, logging in before {func.__name__}..."
            )
            await self.login()
        return await func(self, *args, **kwargs)

    return async_wrapper  # type: ignore
