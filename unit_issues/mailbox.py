"""Inbox with selective receive for signals addressed to a task."""

import asyncio
from collections import deque
from collections.abc import Callable


class Mailbox[T]:
    """Ordered queue of messages supporting selective, time-bounded receive.

    Messages that do not match a receive stay queued in arrival order and
    remain available to later receives. ``send`` must be called from the
    event loop thread; use ``loop.call_soon_threadsafe`` from other threads.
    """

    def __init__(self) -> None:
        self._messages: deque[T] = deque()
        self._arrived = asyncio.Event()

    def send(self, message: T) -> None:
        """Queue a message and wake up any pending receive."""
        self._messages.append(message)
        self._arrived.set()

    async def receive(
        self,
        match: Callable[[T], bool],
        timeout: float | None = None,
    ) -> T:
        """Remove and return the first queued message satisfying ``match``.

        Args:
            match: Predicate selecting the wanted message
            timeout: Maximum wait time in seconds, None waits forever. Messages
                already queued are inspected even with a timeout of 0.

        Returns:
            The matching message

        Raises:
            TimeoutError: If no matching message arrived within timeout

        """
        async with asyncio.timeout(timeout):
            while True:
                for index, message in enumerate(self._messages):
                    if match(message):
                        del self._messages[index]
                        return message
                self._arrived.clear()
                await self._arrived.wait()

    def __len__(self) -> int:
        return len(self._messages)
