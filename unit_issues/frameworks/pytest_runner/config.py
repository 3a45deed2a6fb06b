"""Configuration for the pytest framework."""

from collections.abc import Sequence

from unit_issues.models.base import Model


class PytestConfig(Model):
    """Configuration for the pytest framework.

    ``args`` are passed to every pytest invocation, before the run's own
    options and the target.
    """

    args: Sequence[str] = ("-p", "no:cacheprovider")
    rootdir: str | None = None
