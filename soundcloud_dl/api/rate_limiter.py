"""
Provides the fixed-delay throttle used between API calls and downloads.
"""

import asyncio
import logging
from typing import Awaitable, Callable

log = logging.getLogger(__name__)


class FixedDelayThrottle:
    """
    A naive fixed-rate limiter: callers await a fixed pause after each request
    instead of reacting to rate-limit responses.
    """

    def __init__(self, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self._sleep = sleep
        self.total_waited = 0.0

    async def wait(self, seconds: float) -> None:
        """Pauses for ``seconds``; zero or negative delays return immediately."""
        if seconds <= 0:
            return
        self.total_waited += seconds
        log.debug(f"Throttling for {seconds:.1f}s")
        await self._sleep(seconds)
