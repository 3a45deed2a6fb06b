"""Test framework sessions and the listener collecting their results."""

from unit_issues.frameworks.base import Listener, TestFramework
from unit_issues.frameworks.listener import ResultCollector

__all__ = ["Listener", "ResultCollector", "TestFramework"]
