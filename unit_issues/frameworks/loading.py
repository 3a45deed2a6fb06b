"""Loading of test frameworks registered as entry points."""

from importlib.metadata import entry_points
from typing import Any

from unit_issues.frameworks.manifest import FrameworkManifest

ENTRY_POINT_GROUP = "unit_issues.frameworks"


class FrameworkNotFoundError(Exception):
    """Raised when no usable framework is registered under a key."""


def load_framework_manifest(key: str) -> FrameworkManifest[Any]:
    """Load the manifest of the framework registered as ``key``.

    Raises:
        FrameworkNotFoundError: If ``key`` is not registered, or does not
            refer to a framework manifest

    """
    selected = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not selected:
        available = sorted(entry_points(group=ENTRY_POINT_GROUP).names)
        raise FrameworkNotFoundError(
            f"Framework '{key}' not found. Available frameworks: {available}"
        )

    entry = selected[key]
    manifest = entry.load()
    if not isinstance(manifest, FrameworkManifest):
        raise FrameworkNotFoundError(
            f"Entry point '{key}' ({entry.value}) is not a framework manifest"
        )
    return manifest
