"""Process running pytest for a single framework run.

Usage: ``python -m unit_issues.frameworks.pytest_runner.worker [pytest args]``

The original stdout becomes the signal channel: one frame per
``TestFinished`` signal, then a frame holding the pytest exit status.
Everything pytest prints goes to stderr.
"""

import os
import sys

import pytest

from unit_issues.frameworks.pytest_runner.channel import detach, write_frame
from unit_issues.frameworks.pytest_runner.plugin import ResultPlugin


def main(args: list[str]) -> int:
    """Run pytest with ``args``, streaming its results to stdout."""
    sys.stdout.flush()
    channel = os.fdopen(os.dup(sys.stdout.fileno()), "wb")
    os.dup2(sys.stderr.fileno(), sys.stdout.fileno())

    with channel:
        plugin = ResultPlugin(lambda signal: write_frame(channel, detach(signal)))
        exit_code = int(pytest.main(args, plugins=[plugin]))
        write_frame(channel, exit_code)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
