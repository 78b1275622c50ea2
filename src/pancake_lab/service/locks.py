"""Reader/writer locking for the order collection.

``ReadWriteLock`` admits any number of concurrent readers or exactly one
writer.  Once a writer is waiting, new readers queue behind it so a steady
stream of reads cannot starve writes; there is no ordering guarantee among
waiting writers.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """Non-reentrant reader/writer lock built on ``threading.Condition``."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() without matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer_active:
                raise RuntimeError("release_write() without matching acquire_write()")
            self._writer_active = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer_active


class GlobalLockStrategy:
    """One ``ReadWriteLock`` over the whole order collection.

    A write to one order blocks reads of every other order.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()

    def read(self):
        return self._lock.read_locked()

    def write(self):
        return self._lock.write_locked()

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock


class NoOpLockStrategy:
    """No locking at all.  Single-threaded callers and tests only."""

    @contextmanager
    def read(self) -> Iterator[None]:
        yield

    @contextmanager
    def write(self) -> Iterator[None]:
        yield
