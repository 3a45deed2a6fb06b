"""Tagged success and failure values returned by the run coordinator."""

from dataclasses import dataclass
from typing import Any, Literal

type FailureKind = Literal["rejected", "out-of-band", "timeout", "source-unresolved"]


@dataclass(frozen=True)
class Ok[T]:
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Error[E]:
    """Failed outcome carrying a reason."""

    reason: E


@dataclass(frozen=True, kw_only=True)
class RunFailure:
    """Why a test run produced no report.

    - rejected: the framework refused to start the run
    - out-of-band: the framework reported an error while the run was going
    - timeout: no result arrived in time
    - source-unresolved: the target's source file could not be located
    """

    kind: FailureKind
    reason: Any = None

    def __str__(self) -> str:
        if self.reason is None:
            return self.kind
        return f"{self.kind}: {self.reason}"
