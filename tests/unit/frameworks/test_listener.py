"""Tests for the result collecting listener."""

import asyncio

from unit_issues.frameworks.listener import ResultCollector
from unit_issues.mailbox import Mailbox
from unit_issues.models.result import ResultBundle
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


async def test_relays_start_of_run() -> None:
    """Relays the framework's start signal to the parent."""
    parent: Mailbox[Signal] = Mailbox()
    collector = ResultCollector.start(parent)

    collector.send(Started("ref"))

    assert await parent.receive(lambda s: True, timeout=1) == Started("ref")
    assert collector.task is not None
    collector.task.cancel()


async def test_collects_results_after_start() -> None:
    """Sends the collected bundle once the run completes."""
    parent: Mailbox[Signal] = Mailbox()
    collector = ResultCollector.start(parent)

    collector.send(Started("ref"))
    collector.send(TestFinished("failed", {"line": 2}))
    collector.send(TestFinished("successful", {"line": 1}))
    collector.send(TestFinished("cancelled", {"line": 3}))
    collector.send(TestFinished("successful", {"line": 4}))
    collector.send(RunCompleted("ref"))
    await parent.receive(lambda s: s == Started("ref"), timeout=1)
    collector.send(Start("ref"))

    result = await parent.receive(lambda s: True, timeout=1)

    assert result == ResultReady(
        "ref",
        ResultBundle(
            successful=[{"line": 1}, {"line": 4}],
            failed=[{"line": 2}],
            cancelled=[{"line": 3}],
        ),
    )
    assert collector.task is not None
    await collector.task


async def test_waits_for_start_before_reporting() -> None:
    """Reports nothing until the parent sends the start signal."""
    parent: Mailbox[Signal] = Mailbox()
    collector = ResultCollector.start(parent)

    collector.send(Started("ref"))
    collector.send(RunCompleted("ref"))
    await parent.receive(lambda s: s == Started("ref"), timeout=1)
    await asyncio.sleep(0.01)

    assert len(parent) == 0

    collector.send(Start("other"))
    await asyncio.sleep(0.01)

    assert len(parent) == 0

    collector.send(Start("ref"))
    result = await parent.receive(lambda s: True, timeout=1)

    assert result == ResultReady(
        "ref", ResultBundle(successful=[], failed=[], cancelled=[])
    )


async def test_reports_aborted_run_as_framework_error() -> None:
    """Turns an aborted run into a framework error for the parent."""
    parent: Mailbox[Signal] = Mailbox()
    collector = ResultCollector.start(parent)

    collector.send(Started("ref"))
    collector.send(TestFinished("successful", {"line": 1}))
    collector.send(RunAborted("ref", "pytest exited with status 2"))
    await parent.receive(lambda s: s == Started("ref"), timeout=1)
    collector.send(Start("ref"))

    result = await parent.receive(lambda s: True, timeout=1)

    assert result == FrameworkError("pytest exited with status 2")


async def test_close_stops_collecting() -> None:
    """Closing drops the run still being collected."""
    collector = ResultCollector.start(Mailbox())
    collector.send(Started("ref"))

    collector.close()

    assert collector.task is not None
    await asyncio.wait([collector.task], timeout=1)
    assert collector.task.cancelled()


async def test_close_after_completion_is_harmless() -> None:
    parent: Mailbox[Signal] = Mailbox()
    collector = ResultCollector.start(parent)
    collector.send(Started("ref"))
    collector.send(Start("ref"))
    collector.send(RunAborted("ref", "crashed"))
    assert collector.task is not None
    await collector.task

    collector.close()

    assert not collector.task.cancelled()
