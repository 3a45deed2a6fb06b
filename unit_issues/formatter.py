"""Conversion of raw test results into issues."""

from collections.abc import Mapping, Sequence
from pprint import pformat
from typing import Any

from unit_issues.models.issue import Issue
from unit_issues.models.result import FailureDetail, RawTestResult, ResultBundle

PASSED_MESSAGE = "no asserts failed"

# Fields of FailureDetail.info holding the (expected, value) pair per reason.
REASON_FIELDS: Mapping[str, tuple[str, str]] = {
    "assertException_failed": ("pattern", "unexpected_success"),
    "assertNotException_failed": ("pattern", "unexpected_exception"),
    "assertCmdOutput_failed": ("expected_output", "output"),
    "assertCmd_failed": ("expected_status", "status"),
    "assertEqual_failed": ("expected", "value"),
    "assertMatch_failed": ("pattern", "value"),
    "assertNotEqual_failed": ("expected", "expected"),
    "assertNotMatch_failed": ("pattern", "value"),
    "assertion_failed": ("expected", "value"),
    "command_failed": ("expected_status", "status"),
}


def format_results(source: str, bundle: ResultBundle) -> Sequence[Issue]:
    """Turn a result bundle into issues located in ``source``.

    Passed tests come first, then failed tests, then cancelled tests, each
    group in the order the bundle holds them.
    """
    return [
        *(format_successful(source, result) for result in bundle.successful),
        *(format_failed(source, result) for result in bundle.failed),
        *(format_cancelled(source, result) for result in bundle.cancelled),
    ]


def format_successful(source: str, result: RawTestResult) -> Issue:
    return Issue(
        kind="passed-test",
        source=source,
        line=result["line"],
        message=PASSED_MESSAGE,
    )


def format_failed(source: str, result: RawTestResult) -> Issue:
    detail: FailureDetail = result["status"].reason
    return Issue(
        kind="failed-test",
        source=source,
        line=result["line"],
        message=format_failure(detail),
    )


def format_cancelled(source: str, result: RawTestResult) -> Issue:
    return Issue(
        kind="cancelled-test",
        source=source,
        line=result["line"],
        message=to_str(result.get("reason")),
    )


def format_failure(detail: FailureDetail) -> str:
    """Render a failure as its reason followed by expected and actual values."""
    expected_field, value_field = reason_to_fields(detail.reason_tag)
    expected = info_value(detail.info, expected_field)
    value = info_value(detail.info, value_field)
    return f"{detail.reason_tag}\nexpected: {to_str(expected)}\nvalue: {to_str(value)}"


def reason_to_fields(reason_tag: str) -> tuple[str | None, str | None]:
    """Return the info fields holding the expected and actual values.

    Unknown reasons map to ``(None, None)``.
    """
    return REASON_FIELDS.get(reason_tag, (None, None))


def to_str(value: Any) -> str:
    """Pretty-print ``value`` on a single line."""
    return pformat(value, sort_dicts=False).replace("\n", "")


def info_value(info: Mapping[str, Any], field: str | None) -> Any:
    """Look up a failure info field, None when the field is unknown."""
    if field is None:
        return None
    return info.get(field)
