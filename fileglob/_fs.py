from __future__ import annotations

import posixpath
import time
from contextlib import AbstractContextManager

from ._lock import ReadWriteLock
from ._path import normalize_path
from ._provider import Visitor, walk_tree
from ._typing import StatResult

# ---------------------------------------------------------------------------
#  Directory Index Layer
# ---------------------------------------------------------------------------


class DirNode:
    __slots__ = ("children", "created_at", "modified_at")

    def __init__(self) -> None:
        self.children: dict[str, Node] = {}
        now = time.time()
        self.created_at: float = now
        self.modified_at: float = now


class FileNode:
    __slots__ = ("data", "created_at", "modified_at")

    def __init__(self, data: bytes = b"") -> None:
        self.data: bytes = data
        now = time.time()
        self.created_at: float = now
        self.modified_at: float = now


Node = DirNode | FileNode


# ---------------------------------------------------------------------------
#  MemoryFileSystem
# ---------------------------------------------------------------------------


class MemoryFileSystem:
    """An in-memory directory tree usable as a glob provider.

    Relative and absolute paths are the same thing here: ``"a/b"`` and
    ``"/a/b"`` both name ``b`` inside the top-level directory ``a``.

    Thread safety: structural reads (``stat``, ``listdir``, ``exists``,
    ``read_bytes`` and each directory snapshot taken by ``walk``) share a
    :class:`ReadWriteLock`; every mutation holds it exclusively.  ``walk``
    does not hold the lock across directories, so entries removed by another
    thread mid-walk are skipped (weak consistency).  ``lock_timeout`` bounds
    every acquisition; expiry raises BlockingIOError.
    """

    def __init__(self, lock_timeout: float | None = None) -> None:
        if lock_timeout is not None and lock_timeout < 0:
            raise ValueError(f"Invalid lock_timeout value: {lock_timeout!r}.")
        self._lock = ReadWriteLock()
        self._lock_timeout = lock_timeout
        self._root = DirNode()

    def __repr__(self) -> str:
        return f"MemoryFileSystem(lock_timeout={self._lock_timeout!r})"

    # -- path helpers --

    def _np(self, path: str) -> str:
        return normalize_path(path)

    def _resolve_path(self, npath: str) -> Node | None:
        current: Node = self._root
        for part in npath.split("/"):
            if not part:
                continue
            if not isinstance(current, DirNode):
                return None
            child = current.children.get(part)
            if child is None:
                return None
            current = child
        return current

    def _resolve_parent_and_name(self, npath: str) -> tuple[DirNode, str] | None:
        parent_node = self._resolve_path(posixpath.dirname(npath) or "/")
        if not isinstance(parent_node, DirNode):
            return None
        return parent_node, posixpath.basename(npath)

    def _reading(self) -> AbstractContextManager[None]:
        return self._lock.reading(self._lock_timeout)

    def _writing(self) -> AbstractContextManager[None]:
        return self._lock.writing(self._lock_timeout)

    # -- mutation --

    def mkdir(self, path: str, exist_ok: bool = False) -> None:
        """Create *path* and any missing parents."""
        npath = self._np(path)
        with self._writing():
            node = self._resolve_path(npath)
            if node is not None:
                if isinstance(node, FileNode):
                    raise FileExistsError(f"File exists at path: '{path}'")
                if not exist_ok:
                    raise FileExistsError(f"Directory exists: '{path}'")
                return
            self._makedirs(npath)

    def _makedirs(self, npath: str) -> DirNode:
        current = self._root
        for part in npath.split("/"):
            if not part:
                continue
            child = current.children.get(part)
            if child is None:
                child = DirNode()
                current.children[part] = child
                current.modified_at = child.created_at
            elif isinstance(child, FileNode):
                raise FileExistsError(f"A file exists at path component: '{part}'")
            current = child
        return current

    def write_bytes(self, path: str, data: bytes) -> None:
        """Create or replace the file at *path*; its parent must exist."""
        npath = self._np(path)
        if npath == "/":
            raise IsADirectoryError(f"Is a directory: '{path}'")
        with self._writing():
            pinfo = self._resolve_parent_and_name(npath)
            if pinfo is None:
                parent_path = posixpath.dirname(npath) or "/"
                raise FileNotFoundError(f"Parent directory does not exist: '{parent_path}'")
            parent, name = pinfo
            self._store(parent, name, path, data)

    def _store(self, parent: DirNode, name: str, path: str, data: bytes) -> None:
        node = parent.children.get(name)
        if isinstance(node, DirNode):
            raise IsADirectoryError(f"Is a directory: '{path}'")
        if node is None:
            node = FileNode(bytes(data))
            parent.children[name] = node
            parent.modified_at = node.created_at
            return
        node.data = bytes(data)
        node.modified_at = time.time()

    def import_tree(self, tree: dict[str, bytes]) -> None:
        """Write every ``path -> data`` item, creating parents as needed.

        All paths are validated before anything is written.
        """
        normalized = {self._np(path): data for path, data in tree.items()}
        with self._writing():
            for npath in normalized:
                node = self._resolve_path(npath)
                if isinstance(node, DirNode):
                    raise IsADirectoryError(f"Cannot import over a directory: '{npath}'")
                for parent in _parents(npath):
                    if parent in normalized or isinstance(
                        self._resolve_path(parent), FileNode
                    ):
                        raise FileExistsError(
                            f"A file exists at path component: '{parent}'"
                        )
            for npath, data in normalized.items():
                parent = self._makedirs(posixpath.dirname(npath))
                self._store(parent, posixpath.basename(npath), npath, data)

    def remove(self, path: str) -> None:
        npath = self._np(path)
        with self._writing():
            node = self._resolve_path(npath)
            if node is None:
                raise FileNotFoundError(f"No such file: '{path}'")
            if isinstance(node, DirNode):
                raise IsADirectoryError(f"Is a directory: '{path}'")
            self._detach(npath)

    def rmtree(self, path: str) -> None:
        npath = self._np(path)
        if npath == "/":
            raise ValueError("Cannot remove the root directory.")
        with self._writing():
            node = self._resolve_path(npath)
            if node is None:
                raise FileNotFoundError(f"No such directory: '{path}'")
            if not isinstance(node, DirNode):
                raise NotADirectoryError(f"Not a directory: '{path}'")
            self._detach(npath)

    def _detach(self, npath: str) -> None:
        pinfo = self._resolve_parent_and_name(npath)
        assert pinfo is not None
        parent, name = pinfo
        del parent.children[name]
        parent.modified_at = time.time()

    # -- queries --

    def read_bytes(self, path: str) -> bytes:
        npath = self._np(path)
        with self._reading():
            node = self._resolve_path(npath)
            if node is None:
                raise FileNotFoundError(f"No such file: '{path}'")
            if isinstance(node, DirNode):
                raise IsADirectoryError(f"Is a directory: '{path}'")
            return node.data

    def listdir(self, path: str) -> list[str]:
        """Return the names inside *path*, sorted."""
        npath = self._np(path)
        with self._reading():
            node = self._resolve_path(npath)
            if node is None:
                raise FileNotFoundError(f"No such directory: '{path}'")
            if not isinstance(node, DirNode):
                raise NotADirectoryError(f"Not a directory: '{path}'")
            return sorted(node.children)

    def exists(self, path: str) -> bool:
        try:
            npath = self._np(path)
        except ValueError:
            return False
        with self._reading():
            return self._resolve_path(npath) is not None

    def is_dir(self, path: str) -> bool:
        try:
            npath = self._np(path)
        except ValueError:
            return False
        with self._reading():
            return isinstance(self._resolve_path(npath), DirNode)

    def is_file(self, path: str) -> bool:
        try:
            npath = self._np(path)
        except ValueError:
            return False
        with self._reading():
            return isinstance(self._resolve_path(npath), FileNode)

    def stat(self, path: str) -> StatResult:
        npath = self._np(path)
        with self._reading():
            node = self._resolve_path(npath)
            if node is None:
                raise FileNotFoundError(f"No such file or directory: '{path}'")
            if isinstance(node, DirNode):
                return StatResult(is_dir=True, size=0, modified_at=node.modified_at)
            return StatResult(
                is_dir=False, size=len(node.data), modified_at=node.modified_at
            )

    def export_tree(self, prefix: str = "/") -> dict[str, bytes]:
        """Return ``{absolute path: data}`` for every file under *prefix*."""
        result: dict[str, bytes] = {}

        def collect(path: str, is_dir: bool) -> None:
            if not is_dir:
                result[self._np(path)] = self.read_bytes(path)

        self.walk(prefix, collect)
        return result

    def walk(self, root: str, visit: Visitor) -> None:
        """Visit *root* and its descendants depth-first in name order.

        Reported paths extend *root* as given, so ``walk("a", ...)`` yields
        ``"a"``, ``"a/b"``, ... and ``walk(".", ...)`` yields ``"."``, ``"a"``, ...
        """
        info = self.stat(root)
        walk_tree(root, info["is_dir"], self._list_dir, visit)

    def _list_dir(self, path: str) -> list[tuple[str, bool]]:
        npath = self._np(path)
        with self._reading():
            node = self._resolve_path(npath)
            if not isinstance(node, DirNode):
                return []
            snapshot = sorted(node.children.items())
        return [(name, isinstance(child, DirNode)) for name, child in snapshot]


def _parents(npath: str) -> list[str]:
    parents: list[str] = []
    current = posixpath.dirname(npath)
    while current not in ("", "/"):
        parents.append(current)
        current = posixpath.dirname(current)
    return parents
