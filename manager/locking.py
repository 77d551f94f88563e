# ============================================================================
# READER/WRITER LOCK
# ============================================================================
# STATUS: Manager - In-process concurrency control
# PURPOSE: Many concurrent readers, one exclusive writer
# CREATED: 12 OCT 2026
# ============================================================================
"""
Reader/Writer Lock

Thread-based so that probe workers running on threads and coroutines on
the event loop can share the same structure. Critical sections guarded by
it never await.

Writers are preferred: once a writer is waiting, new readers queue behind
it so a steady stream of reads cannot starve a write.

Usage:
    lock = ReadWriteLock()

    with lock.read_locked():
        value = mapping.get(key)

    with lock.write_locked():
        mapping[key] = value
"""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """Writer-preferring reader/writer lock."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


__all__ = ["ReadWriteLock"]
