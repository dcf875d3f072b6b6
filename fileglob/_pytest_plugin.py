"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["fileglob._pytest_plugin"]

This makes the ``memfs`` fixture automatically available::

    def test_something(memfs):
        memfs.import_tree({"/src/a.py": b"", "/src/b.txt": b""})
        assert glob("src/*.py", fs=memfs) == ["src/a.py"]
"""

import pytest

from ._fs import MemoryFileSystem


@pytest.fixture
def memfs() -> MemoryFileSystem:
    """An empty :class:`MemoryFileSystem`, one per test (function scope)."""
    return MemoryFileSystem()
