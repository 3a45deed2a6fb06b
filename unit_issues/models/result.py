"""Models for raw test results as reported by a test framework."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

type Category = Literal["successful", "failed", "cancelled"]
type RawTestResult = Mapping[str, Any]

CATEGORIES: Sequence[Category] = ("successful", "failed", "cancelled")


@dataclass(frozen=True)
class FailureDetail:
    """Decoded failure of a single test.

    ``info`` holds the fields describing the failure (expected value, actual
    value, pattern, ...). The stack trace is kept for reference only.
    """

    reason_tag: str
    info: Mapping[str, Any]
    stack_trace: Any = None


@dataclass(frozen=True, kw_only=True)
class ResultBundle:
    """Raw results of a completed run, grouped by outcome.

    Every record carries ``line``. Failed records also carry
    ``status`` (an ``Error`` wrapping a ``FailureDetail``), cancelled records
    carry ``reason``.
    """

    successful: Sequence[RawTestResult]
    failed: Sequence[RawTestResult]
    cancelled: Sequence[RawTestResult]

    @classmethod
    def from_mapping(
        cls, results: Mapping[str, Sequence[RawTestResult]]
    ) -> "ResultBundle":
        """Build a bundle from a mapping keyed by category name.

        Raises:
            KeyError: If one of the categories is missing

        """
        return cls(**{category: results[category] for category in CATEGORIES})

    def __len__(self) -> int:
        return len(self.successful) + len(self.failed) + len(self.cancelled)
