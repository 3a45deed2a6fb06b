"""Listener collecting test events into a result bundle."""

import asyncio
import logging

from unit_issues.mailbox import Mailbox
from unit_issues.models.result import CATEGORIES, Category, RawTestResult, ResultBundle
from unit_issues.models.signals import (
    FrameworkError,
    ResultReady,
    RunAborted,
    RunCompleted,
    Signal,
    Start,
    Started,
    TestFinished,
)

log = logging.getLogger(__name__)


class ResultCollector:
    """Collects the events of one run and reports the result to its parent.

    The collector relays the framework's ``Started`` signal to the parent and
    only begins collecting once the parent answers with ``Start``. Events
    received before that stay queued.
    """

    def __init__(self, parent: Mailbox[Signal]) -> None:
        self.parent = parent
        self.mailbox: Mailbox[Signal] = Mailbox()
        self.task: asyncio.Task[None] | None = None

    @classmethod
    def start(cls, parent: Mailbox[Signal]) -> "ResultCollector":
        """Create a collector and spawn its task on the running loop."""
        collector = cls(parent)
        collector.task = asyncio.create_task(collector.collect())
        return collector

    def send(self, signal: Signal) -> None:
        self.mailbox.send(signal)

    def close(self) -> None:
        """Stop collecting, dropping any run still in progress."""
        if self.task is not None and not self.task.done():
            self.task.cancel()

    async def collect(self) -> None:
        """Collect one run, from its start to its completion."""
        started = await self.mailbox.receive(lambda s: isinstance(s, Started))
        if not isinstance(started, Started):
            raise TypeError(f"Unexpected signal: {started!r}")
        token = started.token
        self.parent.send(started)

        await self.mailbox.receive(lambda s: s == Start(token))
        log.debug("Collecting results of run %s", token)

        results: dict[Category, list[RawTestResult]] = {c: [] for c in CATEGORIES}
        while True:
            signal = await self.mailbox.receive(
                lambda s: isinstance(s, TestFinished)
                or (isinstance(s, (RunCompleted, RunAborted)) and s.token == token)
            )
            if isinstance(signal, TestFinished):
                results[signal.category].append(signal.result)
            elif isinstance(signal, RunCompleted):
                log.debug(
                    "Run %s completed: %s",
                    token,
                    ", ".join(f"{len(v)} {k}" for k, v in results.items()),
                )
                self.parent.send(ResultReady(token, ResultBundle(**results)))
                return
            elif isinstance(signal, RunAborted):
                log.debug("Run %s aborted: %s", token, signal.reason)
                self.parent.send(FrameworkError(signal.reason))
                return
