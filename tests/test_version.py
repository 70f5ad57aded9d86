"""Version is single-sourced from pyproject.toml."""

from __future__ import annotations

from pathlib import Path

import tomli


def test_version_exists_and_non_empty() -> None:
    from todotable import __version__

    assert __version__, "__version__ should not be empty"
    assert isinstance(__version__, str)


def test_version_matches_pyproject() -> None:
    from todotable import __version__

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        pyproject = tomli.load(f)

    assert __version__ == pyproject["project"]["version"]


def test_public_api_exported() -> None:
    import todotable

    for name in todotable.__all__:
        assert hasattr(todotable, name), name
