import os
import posixpath

from ._syntax import SEPARATOR


def normalize_path(path: str) -> str:
    converted = path.replace("\\", "/")
    if not converted:
        return "/"

    # Traversal check: simulate path resolution from root (depth 0)
    # relative paths are treated as if prepended with "/"
    depth = 0
    for part in converted.split("/"):
        if part == "..":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Path traversal attempt detected: '{path}'")
        elif part and part != ".":
            depth += 1

    if not converted.startswith("/"):
        converted = "/" + converted
    return posixpath.normpath(converted)


def to_slash(path: str) -> str:
    """Convert host separators to ``/``; a no-op on POSIX hosts."""
    if os.sep != SEPARATOR:
        path = path.replace(os.sep, SEPARATOR)
    if os.altsep and os.altsep != SEPARATOR:
        path = path.replace(os.altsep, SEPARATOR)
    return path


def split_root(pattern: str) -> tuple[str, str]:
    """Split a rooted pattern into ``(root, rest)``.

    The root is ``"/"`` for a leading separator, ``"C:/"`` for a drive on
    hosts that have them, and ``""`` for a relative pattern.
    """
    drive, _ = os.path.splitdrive(pattern)
    if drive:
        return drive + SEPARATOR, pattern[len(drive):].lstrip(SEPARATOR)
    if pattern.startswith(SEPARATOR):
        return SEPARATOR, pattern.lstrip(SEPARATOR)
    return "", pattern


def clean_pattern(pattern: str) -> str:
    while pattern.startswith("./"):
        pattern = pattern[2:]
    if pattern == ".":
        return ""
    return pattern.rstrip(SEPARATOR)


def join(parent: str, name: str) -> str:
    if parent in ("", "."):
        return name
    if parent.endswith(SEPARATOR):
        return parent + name
    return parent + SEPARATOR + name
