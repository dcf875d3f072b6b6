import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager


def _calc_deadline(timeout: float | None) -> float | None:
    if timeout is None:
        return None
    if timeout == 0.0:
        return 0.0
    return time.monotonic() + timeout


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


class ReadWriteLock:
    """A readers–writer lock guarding a directory tree.

    Any number of readers (stat, listdir, walk snapshots) may hold the lock
    together; a writer (any structural change) needs it alone.  Readers are
    not throttled while a writer waits, so a writer can starve under a steady
    read load.  Pass ``timeout`` to bound the wait; expiry raises
    BlockingIOError.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._read_count: int = 0
        self._write_held: bool = False

    def _wait(self, deadline: float | None, what: str) -> None:
        remaining = _remaining(deadline)
        if remaining == 0.0 or not self._condition.wait(timeout=remaining):
            raise BlockingIOError(f"Could not acquire {what} lock within timeout.")

    def acquire_read(self, timeout: float | None = None) -> None:
        deadline = _calc_deadline(timeout)
        with self._condition:
            while self._write_held:
                self._wait(deadline, "read")
            self._read_count += 1

    def release_read(self) -> None:
        with self._condition:
            if self._read_count <= 0:
                raise RuntimeError("release_read called without matching acquire_read")
            self._read_count -= 1
            if self._read_count == 0:
                self._condition.notify_all()

    def acquire_write(self, timeout: float | None = None) -> None:
        deadline = _calc_deadline(timeout)
        with self._condition:
            while self._write_held or self._read_count > 0:
                self._wait(deadline, "write")
            self._write_held = True

    def release_write(self) -> None:
        with self._condition:
            if not self._write_held:
                raise RuntimeError("release_write called without matching acquire_write")
            self._write_held = False
            self._condition.notify_all()

    @contextmanager
    def reading(self, timeout: float | None = None) -> Iterator[None]:
        self.acquire_read(timeout)
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def writing(self, timeout: float | None = None) -> Iterator[None]:
        self.acquire_write(timeout)
        try:
            yield
        finally:
            self.release_write()

    @property
    def is_locked(self) -> bool:
        with self._condition:
            return self._write_held or self._read_count > 0
