"""Pytest collection rules for non-prefixed unit test modules."""

from __future__ import annotations

import pytest
from pathlib import Path


def _is_collectable_test_module(path: Path) -> bool:
    if path.suffix != ".py" or path.name == "__init__.py":
        return False
    return "unit" in path.parts


def pytest_collect_file(file_path: Path, parent):
    """Collect every module under tests/unit, whatever its name."""
    if not _is_collectable_test_module(file_path):
        return None
    return pytest.Module.from_parent(parent, path=file_path)
