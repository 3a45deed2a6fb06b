"""Lookup of the source file backing a test target."""

import importlib.util
import logging

log = logging.getLogger(__name__)


class SourceUnresolvedError(Exception):
    """Raised when a target's source file cannot be located."""


def get_module_source(module: str) -> str:
    """Return the path of the file defining an importable module.

    Args:
        module: Dotted module name (e.g., "mypkg.tests.test_parser")

    Returns:
        Path of the module's source file

    Raises:
        SourceUnresolvedError: If the module cannot be found or has no file

    """
    try:
        spec = importlib.util.find_spec(module)
    except (ImportError, ValueError) as e:
        raise SourceUnresolvedError(f"Cannot resolve module '{module}': {e}") from e

    if spec is None:
        raise SourceUnresolvedError(f"Module '{module}' not found")

    if not spec.has_location or spec.origin is None:
        raise SourceUnresolvedError(f"Module '{module}' has no source file")

    log.debug("Resolved module %s to %s", module, spec.origin)
    return spec.origin
