"""pytest plugin reporting each test's outcome as a raw result."""

from collections.abc import Callable, Generator
from typing import Any

import pytest

from unit_issues.models.outcome import Error
from unit_issues.models.result import FailureDetail
from unit_issues.models.signals import TestFinished

DID_NOT_RAISE = "DID NOT RAISE"


class ResultPlugin:
    """Emits a ``TestFinished`` signal for every reported test outcome."""

    def __init__(self, emit: Callable[[TestFinished], None]) -> None:
        self.emit = emit
        self._comparison: tuple[str, Any, Any] | None = None

    def pytest_assertrepr_compare(self, op: str, left: Any, right: Any) -> None:
        """Remember the operands of the last failed comparison."""
        self._comparison = (op, left, right)

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_call(self, item: pytest.Item) -> None:
        self._comparison = None

    @pytest.hookimpl(wrapper=True, tryfirst=True)
    def pytest_runtest_makereport(
        self, item: pytest.Item, call: pytest.CallInfo[None]
    ) -> Generator[None, pytest.TestReport, pytest.TestReport]:
        report = yield
        comparison, self._comparison = self._comparison, None

        lineno = item.location[1]
        record = {"name": item.nodeid, "line": lineno + 1 if lineno is not None else 0}

        if report.passed and report.when == "call":
            self.emit(TestFinished("successful", record))
        elif report.failed:
            detail = failure_detail(call.excinfo, comparison, report.longreprtext)
            self.emit(TestFinished("failed", {**record, "status": Error(detail)}))
        elif report.skipped:
            reason = skip_reason(report)
            self.emit(TestFinished("cancelled", {**record, "reason": reason}))

        return report


def failure_detail(
    excinfo: pytest.ExceptionInfo[BaseException] | None,
    comparison: tuple[str, Any, Any] | None,
    stack_trace: str,
) -> FailureDetail:
    """Describe a test failure the way assertion macros report them.

    Failed ``==`` and ``!=`` comparisons carry their operands, with the right
    hand side taken as the expected value. The remembered comparison is only
    used when the assertion message shows it, so that a comparison failing
    earlier in the test is not mistaken for the final one.
    """
    if excinfo is None:
        return FailureDetail("failed", {}, stack_trace)

    if excinfo.errisinstance(AssertionError):
        message = str(excinfo.value)
        if comparison is not None and f" {comparison[0]} " in message:
            op, left, right = comparison
            if op == "==":
                info = {"expected": right, "value": left}
                return FailureDetail("assertEqual_failed", info, stack_trace)
            if op == "!=":
                info = {"expected": right, "value": left}
                return FailureDetail("assertNotEqual_failed", info, stack_trace)
        info = {"expression": message, "expected": True, "value": False}
        return FailureDetail("assertion_failed", info, stack_trace)

    message = str(excinfo.value)
    if excinfo.errisinstance(pytest.fail.Exception) and message.startswith(
        DID_NOT_RAISE
    ):
        info = {
            "pattern": message.removeprefix(DID_NOT_RAISE).strip(),
            "unexpected_success": None,
        }
        return FailureDetail("assertException_failed", info, stack_trace)

    return FailureDetail(excinfo.typename, {"value": excinfo.value}, stack_trace)


def skip_reason(report: pytest.TestReport) -> str:
    """Return why a test was skipped or marked as expected to fail."""
    if hasattr(report, "wasxfail"):
        return f"xfail: {report.wasxfail}" if report.wasxfail else "xfail"
    if isinstance(report.longrepr, tuple):
        return report.longrepr[2]
    return str(report.longrepr)
