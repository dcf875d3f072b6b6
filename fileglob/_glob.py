from __future__ import annotations

import dataclasses
import enum
import logging
import os
import posixpath
from dataclasses import dataclass

from ._exceptions import FilesystemError, NotFoundError
from ._matcher import Matcher, compile_pattern, quote_meta
from ._path import clean_pattern, split_root, to_slash
from ._prefix import contains_wildcard, static_prefix
from ._provider import FileSystem, OSFileSystem, SubFileSystem, WalkAction

logger = logging.getLogger(__name__)


class DirectoryMatchMode(enum.Enum):
    """What a directory matched by the pattern contributes to the result."""

    #: every file below the directory, but not the directory itself
    EXPAND = "expand"
    #: the directory's own path, without looking inside
    AS_LEAF = "as_leaf"


@dataclass(frozen=True)
class MatchOptions:
    """Settings for one :func:`glob` call.

    ``fs`` is the provider to walk (``None`` means the host filesystem seen
    from the working directory).  ``prefix`` is prepended to every reported
    path; a rooted pattern appends its root to it, so ``prefix="mnt"`` with
    ``"/srv/*"`` reports ``"mnt/srv/..."``.
    ``quote_meta`` treats the whole pattern as a literal path.
    ``maybe_root_fs`` resolves host patterns that climb out of the working
    directory (``../x/*``) from the filesystem root instead.
    """

    fs: FileSystem | None = None
    directory_mode: DirectoryMatchMode = DirectoryMatchMode.EXPAND
    prefix: str = ""
    quote_meta: bool = False
    maybe_root_fs: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.directory_mode, DirectoryMatchMode):
            raise ValueError(
                f"Invalid directory_mode value: {self.directory_mode!r}. "
                f"Expected one of {[m.name for m in DirectoryMatchMode]}."
            )
        if not isinstance(self.prefix, str):
            raise TypeError(f"prefix must be a str, not {type(self.prefix).__name__}")
        if self.fs is not None and not isinstance(self.fs, FileSystem):
            raise TypeError(
                f"fs must provide stat() and walk(), got {type(self.fs).__name__}"
            )


def glob(
    pattern: str, options: MatchOptions | None = None, **overrides: object
) -> list[str]:
    """Return the sorted paths matching *pattern*.

    *overrides* replace individual fields of *options*, e.g.
    ``glob("a/*", fs=memfs, directory_mode=DirectoryMatchMode.AS_LEAF)``.

    Raises PatternSyntaxError for a malformed pattern, NotFoundError when a
    wildcard-free pattern names a missing path, and FilesystemError when the
    provider fails.  A pattern with wildcards that matches nothing returns an
    empty list.
    """
    opts = options if options is not None else MatchOptions()
    if overrides:
        opts = dataclasses.replace(opts, **overrides)  # type: ignore[arg-type]
    pattern, opts = _rebase(pattern, opts)
    logger.debug("glob %r with %r", pattern, opts)
    return _resolve(pattern, opts)


def _climbs_out(pattern: str) -> bool:
    normalized = posixpath.normpath(pattern)
    return normalized == ".." or normalized.startswith("../")


def _rebase(pattern: str, opts: MatchOptions) -> tuple[str, MatchOptions]:
    pattern = to_slash(pattern)
    if opts.maybe_root_fs and opts.fs is None and _climbs_out(pattern):
        pattern = to_slash(os.path.abspath(pattern))
    if opts.quote_meta:
        pattern = quote_meta(pattern)

    root, rest = split_root(pattern)
    if root:
        if opts.fs is None or isinstance(opts.fs, OSFileSystem):
            fs: FileSystem = OSFileSystem(root)
        else:
            fs = SubFileSystem(opts.fs, "/")
        opts = dataclasses.replace(opts, fs=fs, prefix=opts.prefix + root)
        pattern = rest
    elif opts.fs is None:
        opts = dataclasses.replace(opts, fs=OSFileSystem())
    return clean_pattern(pattern), opts


def _resolve(pattern: str, opts: MatchOptions) -> list[str]:
    fs = opts.fs
    assert fs is not None
    matcher = compile_pattern(pattern)
    prefix = static_prefix(pattern)
    logger.debug("static prefix of %r is %r", pattern, prefix)

    try:
        info = fs.stat(prefix)
    except (FileNotFoundError, NotADirectoryError) as exc:
        if not contains_wildcard(pattern):
            raise NotFoundError(_report(opts, prefix)) from exc
        return []
    except (OSError, ValueError) as exc:
        raise FilesystemError(_report(opts, prefix), exc) from exc

    if not info["is_dir"]:
        # a file prefix is either the only match or nothing matches
        if matcher.match(prefix):
            return [_report(opts, prefix)]
        return []

    try:
        matches = _walk_matches(fs, prefix, pattern, matcher, opts)
    except (OSError, ValueError) as exc:
        raise FilesystemError(_report(opts, prefix), exc) from exc
    logger.debug("%r matched %d path(s)", pattern, len(matches))
    return sorted(set(matches))


def _walk_matches(
    fs: FileSystem, prefix: str, pattern: str, matcher: Matcher, opts: MatchOptions
) -> list[str]:
    matches: list[str] = []

    def collect_files(path: str, is_dir: bool) -> None:
        if not is_dir:
            matches.append(_report(opts, to_slash(path)))

    def visit(path: str, is_dir: bool) -> WalkAction:
        path = to_slash(path)
        if path == ".":
            # the working directory is only ever named by an empty pattern
            if pattern:
                return WalkAction.CONTINUE
        elif not matcher.match(path):
            return WalkAction.CONTINUE

        if not is_dir:
            matches.append(_report(opts, path))
            return WalkAction.CONTINUE
        if opts.directory_mode is DirectoryMatchMode.AS_LEAF:
            matches.append(_report(opts, path))
        else:
            fs.walk(path, collect_files)
        return WalkAction.SKIP_SUBTREE

    fs.walk(prefix, visit)
    return matches


def _report(opts: MatchOptions, path: str) -> str:
    if path == ".":
        return opts.prefix or "."
    return opts.prefix + path
