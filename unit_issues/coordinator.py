"""Test run coordinator turning a framework run into issues."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from unit_issues.config import DEFAULT_TIMEOUT, RunnerConfig
from unit_issues.formatter import format_results
from unit_issues.frameworks.base import Listener, TestFramework
from unit_issues.frameworks.listener import ResultCollector
from unit_issues.mailbox import Mailbox
from unit_issues.models.issue import Issue
from unit_issues.models.outcome import Error, Ok, RunFailure
from unit_issues.models.result import ResultBundle
from unit_issues.models.signals import (
    FrameworkError,
    ResultReady,
    Signal,
    Start,
    Started,
)
from unit_issues.source import SourceUnresolvedError, get_module_source

log = logging.getLogger(__name__)

type RunOutcome = Ok[ResultBundle] | Error[RunFailure]


@dataclass(frozen=True, kw_only=True)
class TestRunCoordinator:
    """Runs the tests of a single target and reports them as issues."""

    __test__ = False

    framework: TestFramework
    config: RunnerConfig = field(default_factory=RunnerConfig)
    source_resolver: Callable[[str], str] = get_module_source
    listener_factory: Callable[[Mailbox[Signal]], Listener] = ResultCollector.start

    async def run_tests(self, target: str) -> Ok[Sequence[Issue]] | Error[RunFailure]:
        """Run the tests of ``target`` and return them as issues.

        Args:
            target: Test target handed to the framework (e.g., a module name)

        Returns:
            Ok with one issue per test, or Error describing why no report exists

        """
        outcome = await self.run(target)
        if isinstance(outcome, Error):
            log.debug("Error in test result of %s: %s", target, outcome.reason)
            return outcome

        log.debug("Run of %s returned %d result(s)", target, len(outcome.value))
        try:
            source = self.source_resolver(target)
        except SourceUnresolvedError as e:
            return Error(RunFailure(kind="source-unresolved", reason=str(e)))

        return Ok(format_results(source, outcome.value))

    async def run(self, target: str) -> RunOutcome:
        """Start a run of ``target`` and wait for its result bundle."""
        log.debug("Running tests in %s", target)
        inbox: Mailbox[Signal] = Mailbox()
        listener = self.listener_factory(inbox)

        try:
            started = await self.framework.start_run(
                listener, target, self.config.options
            )
            if isinstance(started, Error):
                return Error(RunFailure(kind="rejected", reason=started.reason))

            return await await_result(
                started.value,
                listener,
                inbox,
                timeout=self.config.timeout,
                start_timeout=self.config.start_timeout,
            )
        finally:
            listener.close()


async def await_result(
    token: str,
    listener: Listener,
    inbox: Mailbox[Signal],
    timeout: float = DEFAULT_TIMEOUT,
    start_timeout: float | None = None,
) -> RunOutcome:
    """Wait for the run ``token`` to start, then for its result.

    Once the run has started, the listener is told to start collecting. Then
    the first of a result for ``token``, any framework error, or the
    timeout ends the wait.

    Args:
        token: Run token returned by the framework
        listener: Listener collecting the run's events
        inbox: Mailbox receiving the run's signals
        timeout: Seconds to wait for the result once started
        start_timeout: Seconds to wait for the start, None waits forever

    Returns:
        Ok with the run's result bundle, or Error on framework error or timeout

    """
    log.debug("Waiting for start of run %s...", token)
    try:
        await inbox.receive(lambda s: s == Started(token), timeout=start_timeout)
    except TimeoutError:
        return Error(RunFailure(kind="timeout", reason="start"))
    listener.send(Start(token))

    log.debug("Waiting for result of run %s...", token)
    try:
        signal = await inbox.receive(
            lambda s: isinstance(s, FrameworkError)
            or (isinstance(s, ResultReady) and s.token == token),
            timeout=timeout,
        )
    except TimeoutError:
        return Error(RunFailure(kind="timeout"))

    if isinstance(signal, FrameworkError):
        return Error(RunFailure(kind="out-of-band", reason=signal.reason))
    if isinstance(signal, ResultReady):
        return Ok(signal.bundle)
    raise TypeError(f"Unexpected signal: {signal!r}")
