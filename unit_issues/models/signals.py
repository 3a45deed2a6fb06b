"""Signals exchanged between a test framework, its listener and the coordinator."""

from dataclasses import dataclass
from typing import Any

from unit_issues.models.result import Category, RawTestResult, ResultBundle


@dataclass(frozen=True)
class Started:
    """The framework has begun the run identified by ``token``."""

    token: str


@dataclass(frozen=True)
class Start:
    """Tells the listener to begin collecting events for ``token``."""

    token: str


@dataclass(frozen=True)
class ResultReady:
    """The listener finished collecting the run's results."""

    token: str
    bundle: ResultBundle


@dataclass(frozen=True)
class FrameworkError:
    """Asynchronous error raised outside of any particular run."""

    reason: Any


@dataclass(frozen=True)
class TestFinished:
    """One test produced a raw result."""

    __test__ = False

    category: Category
    result: RawTestResult


@dataclass(frozen=True)
class RunCompleted:
    """The framework ran every test of the run."""

    token: str


@dataclass(frozen=True)
class RunAborted:
    """The framework gave up on the run."""

    token: str
    reason: Any


type Signal = (
    Started
    | Start
    | ResultReady
    | FrameworkError
    | TestFinished
    | RunCompleted
    | RunAborted
)
