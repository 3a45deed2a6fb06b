"""Normalized issue records produced from test results."""

from dataclasses import dataclass
from typing import Any, Literal

type IssueKind = Literal["passed-test", "failed-test", "cancelled-test"]


@dataclass(frozen=True, kw_only=True)
class Issue:
    """A single test outcome, located in the target's source file."""

    kind: IssueKind
    source: str
    line: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "kind": self.kind,
            "source": self.source,
            "line": self.line,
            "message": self.message,
        }
