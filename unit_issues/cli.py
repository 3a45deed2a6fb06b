"""CLI entry point for running a target's tests and reporting issues."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from unit_issues.config import DEFAULT_TIMEOUT, RunnerConfig
from unit_issues.coordinator import TestRunCoordinator
from unit_issues.frameworks.loading import load_framework_manifest
from unit_issues.models.issue import Issue
from unit_issues.models.outcome import Error, RunFailure

KIND_SYMBOLS = {
    "passed-test": "✓",
    "failed-test": "✗",
    "cancelled-test": "-",
}


def log_issues_summary(log: logging.Logger, issues: Sequence[Issue]) -> None:
    """Log a formatted summary of the reported issues."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for issue in issues:
        symbol = KIND_SYMBOLS.get(issue.kind, "?")
        log.info("%s %s:%d: %s", symbol, issue.source, issue.line, issue.kind)
        if issue.kind != "passed-test":
            for line in issue.message.splitlines():
                log.info("  %s", line)


def format_output(issues: Sequence[Issue]) -> dict[str, Any]:
    """Format issues for JSON output."""
    return {
        "total": len(issues),
        "passed": sum(1 for i in issues if i.kind == "passed-test"),
        "failed": sum(1 for i in issues if i.kind == "failed-test"),
        "cancelled": sum(1 for i in issues if i.kind == "cancelled-test"),
        "issues": [issue.to_dict() for issue in issues],
    }


def format_error(failure: RunFailure) -> dict[str, Any]:
    """Format a run failure for JSON output."""
    reason = failure.reason
    if reason is not None and not isinstance(reason, (str, int, float, bool)):
        reason = repr(reason)
    return {"error": {"kind": failure.kind, "reason": reason}}


async def run(
    target: str,
    framework_key: str,
    framework_config_json: str,
    runner_config: RunnerConfig,
) -> int:
    """Run the tests of ``target`` and return exit code."""
    log = logging.getLogger("unit_issues")

    log.info("Loading framework: %s", framework_key)
    manifest = load_framework_manifest(framework_key)

    log.info("Running tests of %s...", target)
    async with manifest.open(framework_config_json) as framework:
        coordinator = TestRunCoordinator(framework=framework, config=runner_config)
        outcome = await coordinator.run_tests(target)

    if isinstance(outcome, Error):
        log.error("Test run of %s failed: %s", target, outcome.reason)
        print(json.dumps(format_error(outcome.reason), indent=2))
        return 1

    issues = outcome.value
    log_issues_summary(log, issues)
    print(json.dumps(format_output(issues), indent=2))

    return 1 if any(issue.kind == "failed-test" for issue in issues) else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run the tests of a module and report them as issues"
    )
    parser.add_argument("target", help="Test target (e.g., a dotted module name)")
    parser.add_argument(
        "--framework",
        default="pytest",
        help="Framework key (default: pytest)",
    )
    parser.add_argument(
        "--framework-config",
        default="{}",
        help="JSON configuration for the framework",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for results once the run has started",
    )
    parser.add_argument(
        "--start-timeout",
        type=float,
        default=None,
        help="Seconds to wait for the run to start (default: wait forever)",
    )
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        dest="options",
        help="Option passed to the framework (repeatable)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            target=args.target,
            framework_key=args.framework,
            framework_config_json=args.framework_config,
            runner_config=RunnerConfig(
                timeout=args.timeout,
                start_timeout=args.start_timeout,
                options=args.options,
            ),
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
