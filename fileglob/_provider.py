"""Filesystem providers.

A provider is anything with ``stat`` and ``walk`` (see :class:`FileSystem`).
Paths handed to a provider are ``/``-separated and relative to the
provider's root; ``"."`` names the root itself.
"""

from __future__ import annotations

import enum
import os
import posixpath
import stat as stat_module
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ._path import join
from ._typing import StatResult


class WalkAction(enum.Enum):
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


Visitor = Callable[[str, bool], WalkAction | None]


@runtime_checkable
class FileSystem(Protocol):
    def stat(self, path: str) -> StatResult:
        """Return metadata for *path*.

        Raises FileNotFoundError when it does not exist and NotADirectoryError
        when a parent component is a file.
        """
        ...

    def walk(self, root: str, visit: Visitor) -> None:
        """Visit *root* and everything below it, depth-first, name-sorted.

        ``visit(path, is_dir)`` returns ``WalkAction.SKIP_SUBTREE`` to avoid
        descending into a directory; any exception it raises aborts the walk.
        """
        ...


def walk_tree(
    root: str,
    root_is_dir: bool,
    list_dir: Callable[[str], list[tuple[str, bool]]],
    visit: Visitor,
) -> None:
    """Pre-order traversal driven by an explicit stack.

    *list_dir* returns ``(name, is_dir)`` pairs sorted by name.
    """
    stack: list[tuple[str, bool]] = [(root, root_is_dir)]
    while stack:
        path, is_dir = stack.pop()
        action = visit(path, is_dir)
        if not is_dir or action is WalkAction.SKIP_SUBTREE:
            continue
        entries = list_dir(path)
        for name, child_is_dir in reversed(entries):
            stack.append((join(path, name), child_is_dir))


class OSFileSystem:
    """The host filesystem, seen from *root*."""

    def __init__(self, root: str = ".") -> None:
        if not isinstance(root, str) or not root:
            raise ValueError(f"Invalid root: {root!r}")
        self.root = root

    def __repr__(self) -> str:
        return f"OSFileSystem({self.root!r})"

    def _host_path(self, path: str) -> str:
        if path in ("", "."):
            return self.root
        return os.path.join(self.root, path.lstrip("/"))

    def stat(self, path: str) -> StatResult:
        host = self._host_path(path)
        try:
            st = os.stat(host)
        except FileNotFoundError:
            # A dangling symlink still names an entry.
            st = os.lstat(host)
        return StatResult(
            is_dir=stat_module.S_ISDIR(st.st_mode),
            size=st.st_size,
            modified_at=st.st_mtime,
        )

    def _list_dir(self, path: str) -> list[tuple[str, bool]]:
        with os.scandir(self._host_path(path)) as it:
            entries = [(entry.name, entry.is_dir(follow_symlinks=False)) for entry in it]
        entries.sort()
        return entries

    def walk(self, root: str, visit: Visitor) -> None:
        info = self.stat(root)
        walk_tree(root, info["is_dir"], self._list_dir, visit)


class SubFileSystem:
    """A view of *base* rooted at the directory *root*.

    Paths never leave the view: ``..`` components that would climb above
    *root* raise ValueError.
    """

    def __init__(self, base: FileSystem, root: str) -> None:
        self.base = base
        self.root = root

    def __repr__(self) -> str:
        return f"SubFileSystem({self.base!r}, {self.root!r})"

    def _full_path(self, path: str) -> str:
        if path in ("", "."):
            return self.root
        rel = posixpath.normpath(path.lstrip("/"))
        if rel == ".":
            return self.root
        if rel == ".." or rel.startswith("../"):
            raise ValueError(f"Path escapes {self.root!r}: '{path}'")
        return join(self.root, rel)

    def stat(self, path: str) -> StatResult:
        return self.base.stat(self._full_path(path))

    def walk(self, root: str, visit: Visitor) -> None:
        full = self._full_path(root)

        def relative_visit(path: str, is_dir: bool) -> WalkAction | None:
            rest = path[len(full):].lstrip("/")
            return visit(join(root, rest) if rest else root, is_dir)

        self.base.walk(full, relative_visit)
