"""pytest framework manifest."""

from unit_issues.frameworks.manifest import FrameworkManifest
from unit_issues.frameworks.pytest_runner.config import PytestConfig
from unit_issues.frameworks.pytest_runner.framework import PytestFramework

pytest_manifest = FrameworkManifest(
    config_cls=PytestConfig,
    framework_factory=PytestFramework.from_config,
)
