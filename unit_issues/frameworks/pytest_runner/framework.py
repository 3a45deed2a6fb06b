"""pytest test framework implementation."""

import asyncio
import logging
import os
import sys
import uuid
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, cast

import pytest

from unit_issues.frameworks.base import Listener, TestFramework
from unit_issues.frameworks.pytest_runner.channel import read_frames
from unit_issues.frameworks.pytest_runner.config import PytestConfig
from unit_issues.models.outcome import Error, Ok
from unit_issues.models.signals import RunAborted, RunCompleted, Started
from unit_issues.source import SourceUnresolvedError, get_module_source

log = logging.getLogger(__name__)

WORKER_MODULE = "unit_issues.frameworks.pytest_runner.worker"

COMPLETED_EXIT_CODES: frozenset[int] = frozenset(
    [
        pytest.ExitCode.OK,
        pytest.ExitCode.TESTS_FAILED,
        pytest.ExitCode.NO_TESTS_COLLECTED,
    ]
)


@dataclass(frozen=True, kw_only=True)
class PytestFramework(TestFramework):
    """Runs the tests of an importable module with pytest.

    Each run executes ``pytest --pyargs <module>`` in a worker process. Test
    outcomes stream back over the worker's stdout and are sent to the
    listener as they arrive.
    """

    config: PytestConfig = field(default_factory=PytestConfig)
    runs: set[asyncio.Task[None]] = field(default_factory=set, repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: PytestConfig
    ) -> AsyncGenerator["PytestFramework", None]:
        """Create framework, killing unfinished runs on exit."""
        framework = cls(config=config)
        try:
            yield framework
        finally:
            runs = list(framework.runs)
            for task in runs:
                task.cancel()
            await asyncio.gather(*runs, return_exceptions=True)

    async def start_run(
        self,
        listener: Listener,
        target: str,
        options: Sequence[str],
    ) -> Ok[str] | Error[Any]:
        """Start a pytest run for the module ``target``."""
        try:
            get_module_source(target)
        except SourceUnresolvedError as e:
            log.info("Refusing to run %s: %s", target, e)
            return Error(str(e))

        token = uuid.uuid4().hex
        listener.send(Started(token))

        task = asyncio.create_task(
            self._run(listener, token, self.build_args(target, options))
        )
        self.runs.add(task)
        task.add_done_callback(self.runs.discard)

        log.info("Started pytest run %s for %s", token, target)
        return Ok(token)

    def build_args(self, target: str, options: Sequence[str]) -> list[str]:
        """Build the pytest command line for a run."""
        args = list(self.config.args)
        if self.config.rootdir is not None:
            args.extend(["--rootdir", self.config.rootdir])
        args.extend(options)
        args.extend(["--pyargs", target])
        return args

    async def _run(self, listener: Listener, token: str, args: list[str]) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                sys.executable,
                "-m",
                WORKER_MODULE,
                *args,
                stdout=asyncio.subprocess.PIPE,
                env=worker_env(),
            )
        except OSError as e:
            log.exception("pytest run %s could not start", token)
            listener.send(RunAborted(token, f"pytest crashed: {e}"))
            return

        exit_code = None
        try:
            stdout = cast(asyncio.StreamReader, process.stdout)
            async for frame in read_frames(stdout):
                if isinstance(frame, int):
                    exit_code = frame
                else:
                    listener.send(frame)
            returncode = await process.wait()
        finally:
            if process.returncode is None:
                log.info("Killing pytest run %s", token)
                process.kill()
                await process.wait()

        if exit_code is None:
            log.warning("pytest run %s crashed with status %d", token, returncode)
            reason = f"pytest crashed with status {returncode}"
            listener.send(RunAborted(token, reason))
        elif exit_code in COMPLETED_EXIT_CODES:
            log.info("pytest run %s finished with status %d", token, exit_code)
            listener.send(RunCompleted(token))
        else:
            log.warning("pytest run %s aborted with status %d", token, exit_code)
            listener.send(RunAborted(token, f"pytest exited with status {exit_code}"))


def worker_env() -> dict[str, str]:
    """Environment letting the worker import the modules this process can."""
    path = os.pathsep.join(entry or os.getcwd() for entry in sys.path)
    return {**os.environ, "PYTHONPATH": path}
