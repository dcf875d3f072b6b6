from typing import TYPE_CHECKING

from ._exceptions import FilesystemError, GlobError, NotFoundError, PatternSyntaxError
from ._fs import MemoryFileSystem
from ._glob import DirectoryMatchMode, MatchOptions, glob
from ._matcher import quote_meta
from ._prefix import contains_wildcard, valid_pattern
from ._provider import FileSystem, OSFileSystem, SubFileSystem, WalkAction
from ._typing import StatResult

if TYPE_CHECKING:
    from ._async import aglob


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "aglob":
        from ._async import aglob

        globals()["aglob"] = aglob
        return aglob
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "glob",
    "aglob",
    "valid_pattern",
    "contains_wildcard",
    "quote_meta",
    "MatchOptions",
    "DirectoryMatchMode",
    "FileSystem",
    "WalkAction",
    "StatResult",
    "OSFileSystem",
    "SubFileSystem",
    "MemoryFileSystem",
    "GlobError",
    "PatternSyntaxError",
    "NotFoundError",
    "FilesystemError",
]
__version__ = "0.1.0"
