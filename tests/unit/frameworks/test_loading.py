"""Tests for framework loading module."""

from importlib.metadata import EntryPoint, EntryPoints
from typing import Any
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from unit_issues.frameworks.loading import (
    ENTRY_POINT_GROUP,
    FrameworkNotFoundError,
    load_framework_manifest,
)
from unit_issues.frameworks.pytest_runner import (
    PytestConfig,
    PytestFramework,
    pytest_manifest,
)


def test_load_framework_manifest_returns_manifest() -> None:
    """Loads framework manifest by key."""
    manifest = load_framework_manifest("pytest")

    assert manifest is pytest_manifest


def test_load_framework_manifest_raises_for_unknown_framework() -> None:
    """Raises FrameworkNotFoundError for unknown framework key."""
    with pytest.raises(FrameworkNotFoundError) as exc_info:
        load_framework_manifest("unknown-framework")

    assert "unknown-framework" in str(exc_info.value)
    assert "Available frameworks" in str(exc_info.value)
    assert "'pytest'" in str(exc_info.value)


def test_load_framework_manifest_rejects_other_objects() -> None:
    """Entry points that do not refer to a manifest are not frameworks."""
    registered = EntryPoints(
        [EntryPoint(name="broken", value="json:loads", group=ENTRY_POINT_GROUP)]
    )

    def select(**params: Any) -> EntryPoints:
        return registered.select(**params)

    with (
        patch("unit_issues.frameworks.loading.entry_points", side_effect=select),
        pytest.raises(FrameworkNotFoundError, match="json:loads"),
    ):
        load_framework_manifest("broken")


async def test_manifest_opens_configured_framework() -> None:
    """Opens a framework session from its JSON configuration."""
    async with pytest_manifest.open('{"rootdir": "/repo"}') as framework:
        assert isinstance(framework, PytestFramework)
        assert framework.config == PytestConfig(rootdir="/repo")


def test_manifest_rejects_unknown_options() -> None:
    with pytest.raises(ValidationError):
        pytest_manifest.open('{"root_dir": "/repo"}')
