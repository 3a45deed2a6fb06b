"""Configuration for test runs."""

from collections.abc import Sequence

from pydantic import Field

from unit_issues.models.base import Model

DEFAULT_TIMEOUT = 20.0


class RunnerConfig(Model):
    """Run coordinator configuration."""

    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        ge=0,
        description="Seconds to wait for results once the run has started",
    )
    start_timeout: float | None = Field(
        default=None,
        ge=0,
        description="Seconds to wait for the run to start (None waits forever)",
    )
    options: Sequence[str] = Field(
        default=(), description="Options passed to the framework with each run"
    )
