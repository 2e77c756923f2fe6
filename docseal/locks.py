"""
docseal - Reader-Writer Lock

Many concurrent readers or one exclusive writer. A waiting writer blocks
new readers, so a steady stream of lookups cannot starve registration.

Not reentrant: a thread holding the read lock must not ask for the
write lock (or vice versa).

Usage:
    lock = ReadWriteLock()
    with lock.read_locked():
        value = table.get(key)
    with lock.write_locked():
        table[key] = value
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """Writer-preferring reader-writer lock built on threading.Condition."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """
        Number of threads currently holding the read lock.

        Diagnostic only: read without taking the lock, so the value may be
        stale by the time it is used. Never base locking decisions on it.
        """
        return self._readers

    @property
    def write_held(self) -> bool:
        """Whether a writer holds the lock. Diagnostic only, read unlocked."""
        return self._writer

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a read lock held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                # interrupted while waiting: let blocked readers re-check
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without the write lock held")
            self._writer = False
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
