"""pytest test framework module."""

from unit_issues.frameworks.pytest_runner.config import PytestConfig
from unit_issues.frameworks.pytest_runner.framework import PytestFramework
from unit_issues.frameworks.pytest_runner.manifest import pytest_manifest

__all__ = ["PytestConfig", "PytestFramework", "pytest_manifest"]
