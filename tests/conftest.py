import pytest

from fileglob import MemoryFileSystem

pytest_plugins = ["fileglob._pytest_plugin"]


@pytest.fixture
def make_memfs():
    """Build a MemoryFileSystem holding *files* (content = own path) and empty *dirs*."""

    def build(files=(), dirs=()) -> MemoryFileSystem:
        fs = MemoryFileSystem()
        fs.import_tree({path: path.encode() for path in files})
        for d in dirs:
            fs.mkdir(d, exist_ok=True)
        return fs

    return build


@pytest.fixture
def make_os_tree(tmp_path):
    """Create *files* and empty *dirs* below ``tmp_path`` and return it."""

    def build(files=(), dirs=()):
        for f in files:
            target = tmp_path / f
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(f.encode())
        for d in dirs:
            (tmp_path / d).mkdir(parents=True, exist_ok=True)
        return tmp_path

    return build
