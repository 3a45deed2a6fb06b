"""Tests for module source lookup."""

from pathlib import Path

import pytest

from unit_issues.source import SourceUnresolvedError, get_module_source


def test_resolves_module_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Returns the file a module is defined in."""
    (tmp_path / "resolvable_sample_mod.py").write_text("X = 1\n")
    monkeypatch.syspath_prepend(str(tmp_path))

    source = get_module_source("resolvable_sample_mod")

    assert Path(source) == tmp_path / "resolvable_sample_mod.py"


def test_resolves_package_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Resolves dotted names inside packages."""
    package = tmp_path / "resolvable_sample_pkg"
    package.mkdir()
    (package / "__init__.py").write_text("")
    (package / "test_things.py").write_text("")
    monkeypatch.syspath_prepend(str(tmp_path))

    source = get_module_source("resolvable_sample_pkg.test_things")

    assert Path(source) == package / "test_things.py"


def test_raises_for_unknown_module() -> None:
    """Raises SourceUnresolvedError for modules that do not exist."""
    with pytest.raises(SourceUnresolvedError, match="not found"):
        get_module_source("no_such_module_for_unit_issues")


def test_raises_for_unknown_parent_package() -> None:
    """Raises SourceUnresolvedError when a parent package is missing."""
    with pytest.raises(SourceUnresolvedError, match="Cannot resolve"):
        get_module_source("no_such_package_for_unit_issues.test_mod")


def test_raises_for_builtin_module() -> None:
    """Raises SourceUnresolvedError for modules without a source file."""
    with pytest.raises(SourceUnresolvedError, match="no source file"):
        get_module_source("sys")
