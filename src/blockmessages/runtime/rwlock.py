"""Readers-writer lock guarding the MessageResolver tables.

Lookups share the lock; batch merges hold it exclusively. A waiting
writer blocks new readers so a steady stream of lookups cannot starve a
load. A thread may nest read acquisitions, but it may not take the write
lock while reading, read while writing, or nest write acquisitions:
each of these raises RuntimeError instead of deadlocking.

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference and reentrant reads.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     message = table.get(key)
        >>> with lock.write():
        ...     table.update(batch)
    """

    __slots__ = ("_cond", "_pending_writers", "_read_depth", "_writer")

    def __init__(self) -> None:
        self._cond = threading.Condition()
        # Reading thread ident -> nesting depth
        self._read_depth: dict[int, int] = {}
        self._writer: int | None = None
        self._pending_writers = 0

    @contextmanager
    def read(self) -> Generator[None]:
        """Hold the lock shared for the duration of the block.

        Raises:
            RuntimeError: If the calling thread holds the write lock
        """
        self._acquire_read()
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self) -> Generator[None]:
        """Hold the lock exclusively for the duration of the block.

        Raises:
            RuntimeError: If the calling thread already holds the lock
        """
        self._acquire_write()
        try:
            yield
        finally:
            self._release_write()

    def _acquire_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            depth = self._read_depth.get(me, 0)
            if depth:
                self._read_depth[me] = depth + 1
                return
            if self._writer == me:
                msg = "Cannot acquire read lock while holding write lock"
                raise RuntimeError(msg)
            self._cond.wait_for(
                lambda: self._writer is None and self._pending_writers == 0
            )
            self._read_depth[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            depth = self._read_depth.get(me, 0)
            if not depth:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            if depth > 1:
                self._read_depth[me] = depth - 1
                return
            del self._read_depth[me]
            if not self._read_depth:
                self._cond.notify_all()

    def _acquire_write(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if me in self._read_depth:
                msg = "Cannot upgrade read lock to write lock"
                raise RuntimeError(msg)
            if self._writer == me:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)
            self._pending_writers += 1
            try:
                self._cond.wait_for(
                    lambda: self._writer is None and not self._read_depth
                )
            finally:
                self._pending_writers -= 1
            self._writer = me

    def _release_write(self) -> None:
        with self._cond:
            if self._writer != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._writer = None
            self._cond.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of threads currently holding the read lock."""
        with self._cond:
            return len(self._read_depth)

    @property
    def writer_active(self) -> bool:
        """True while some thread holds the write lock."""
        with self._cond:
            return self._writer is not None

    @property
    def writers_waiting(self) -> int:
        """Number of threads blocked on the write lock."""
        with self._cond:
            return self._pending_writers
