"""Smoke tests for the public import surface of hello_messaging."""

import importlib
from pathlib import Path

import pytest


pytestmark = pytest.mark.smoke


def _module_names(package_dir: Path) -> list[str]:
    names = []
    for path in sorted(package_dir.rglob("*.py")):
        if path.name.endswith("_test.py"):
            continue
        relative = path.relative_to(package_dir.parent).with_suffix("")
        parts = list(relative.parts)
        if parts[-1] == "__init__":
            parts.pop()
        names.append(".".join(parts))
    return names


def test_every_module_imports(package_dir: Path) -> None:
    """Each production module imports cleanly (no circular imports)."""
    for name in _module_names(package_dir):
        importlib.import_module(name)


def test_public_names_are_exported() -> None:
    package = importlib.import_module("hello_messaging")

    missing = [name for name in package.__all__ if not hasattr(package, name)]

    assert missing == []


def test_console_entry_points_resolve(project_root: Path) -> None:
    """The console scripts declared in pyproject.toml point at real callables."""
    pyproject = (project_root / "pyproject.toml").read_text()
    cli = importlib.import_module("hello_messaging.cli")

    for script, target in (
        ("hello-publisher", "publisher_main"),
        ("hello-consumer", "consumer_main"),
    ):
        assert f'{script} = "hello_messaging.cli:{target}"' in pyproject
        assert callable(getattr(cli, target))
