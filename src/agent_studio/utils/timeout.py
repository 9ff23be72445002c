"""Timeout utilities for agent studio."""

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


class TimeoutError(Exception):
    """An awaited operation ran past its deadline.

    Attributes:
        seconds: The deadline that was exceeded
    """

    def __init__(self, seconds: float, what: str = "Operation") -> None:
        super().__init__(f"{what} timed out after {seconds:g} seconds")
        self.seconds = seconds


async def wait_with_timeout(awaitable: Awaitable[T], seconds: float, what: str = "Operation") -> T:
    """Await with a deadline. The awaited task is cancelled when it passes.

    Args:
        awaitable: Coroutine to wait for
        seconds: Deadline in seconds
        what: Name of the operation, for the error message

    Raises:
        TimeoutError: If the deadline passes first
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError:
        raise TimeoutError(seconds, what) from None
