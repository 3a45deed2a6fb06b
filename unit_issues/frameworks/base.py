"""Abstract base class for test framework sessions."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from unit_issues.models.outcome import Error, Ok
from unit_issues.models.signals import Signal


class Listener(Protocol):
    """Addressable endpoint receiving a run's signals."""

    def send(self, signal: Signal) -> None:
        """Deliver a signal to the endpoint."""

    def close(self) -> None:
        """Release the endpoint once the caller stopped waiting for the run."""


@dataclass(frozen=True, kw_only=True)
class TestFramework(ABC):
    """Abstract base for test frameworks able to run a target's tests.

    A run is started with ``start_run`` and then reports to the listener:
    ``Started`` once, then one ``TestFinished`` per test, and finally
    either ``RunCompleted`` or ``RunAborted``, all tagged with the run token.
    """

    __test__ = False

    @abstractmethod
    async def start_run(
        self,
        listener: Listener,
        target: str,
        options: Sequence[str],
    ) -> Ok[str] | Error[Any]:
        """Begin running the tests of ``target`` in the background.

        Args:
            listener: Endpoint receiving the run's signals
            target: Test target (e.g., a dotted module name)
            options: Framework specific options for this run

        Returns:
            Ok with the run token, or Error with the reason the run was refused

        """
