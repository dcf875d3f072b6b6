class GlobError(Exception):
    """Base class for every error raised by :func:`fileglob.glob`."""


class PatternSyntaxError(GlobError, ValueError):
    """Raised when a pattern, or one of its path segments, fails to parse.

    Subclass of ValueError.
    """
    def __init__(self, pattern: str, reason: str, position: int | None = None) -> None:
        self.pattern = pattern
        self.reason = reason
        self.position = position
        super().__init__(f"compile glob pattern {pattern!r}: {reason}")


class NotFoundError(GlobError, FileNotFoundError):
    """Raised when a wildcard-free pattern names a path that does not exist.

    Subclass of FileNotFoundError.
    """
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"matching {path!r}: file does not exist")


class FilesystemError(GlobError, OSError):
    """Raised when the filesystem provider fails during stat or walk.

    Subclass of OSError.
    """
    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        super().__init__(f"glob {path!r}: {cause}")
