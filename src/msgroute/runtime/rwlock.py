"""Readers-writer lock guarding the category resolution registry.

Category lookups vastly outnumber registry mutations: once a category has
been resolved every later lookup is a plain dictionary read. The lock lets
any number of those reads proceed together while scanning, realization and
registration run exclusively.

Semantics:
    - Many concurrent readers OR one writer
    - Writer preference: a waiting writer blocks new readers
    - Reentrant reads: a thread may nest read() blocks
    - No upgrade (read -> write) and no downgrade (write -> read);
      both raise RuntimeError instead of deadlocking
    - No write reentrancy; raises RuntimeError
    - Optional timeout on acquisition; raises TimeoutError

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # shared
        >>> with lock.write():
        ...     pass  # exclusive
    """

    __slots__ = (
        "_condition",
        "_readers",
        "_waiting_writers",
        "_writer",
    )

    def __init__(self) -> None:
        """Initialize an unlocked readers-writer lock."""
        self._condition = threading.Condition(threading.Lock())
        # thread id -> nesting depth of that thread's read() blocks
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._waiting_writers: int = 0

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock in shared mode for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 never waits.

        Raises:
            RuntimeError: If the calling thread holds the write lock.
            TimeoutError: If the lock was not acquired in time.
            ValueError: If timeout is negative.
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock in exclusive mode for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 never waits.

        Raises:
            RuntimeError: If the calling thread already holds the lock.
            TimeoutError: If the lock was not acquired in time.
            ValueError: If timeout is negative.
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        if timeout < 0:
            msg = f"Timeout must be non-negative, got {timeout}"
            raise ValueError(msg)
        return time.monotonic() + timeout

    def _wait_while(
        self, blocked: Callable[[], bool], deadline: float | None, mode: str
    ) -> None:
        """Wait on the condition until blocked() is false. Caller holds _condition."""
        while blocked():
            if deadline is None:
                self._condition.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                msg = f"Timed out waiting for {mode} lock"
                raise TimeoutError(msg)
            self._condition.wait(timeout=remaining)

    def _acquire_read(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._readers:
                self._readers[me] += 1
                return
            if self._writer == me:
                msg = (
                    "Cannot acquire read lock while holding write lock. "
                    "Release the write lock first."
                )
                raise RuntimeError(msg)

            self._wait_while(
                lambda: self._writer is not None or self._waiting_writers > 0,
                deadline,
                "read",
            )
            self._readers[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()

        with self._condition:
            depth = self._readers.get(me)
            if depth is None:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            if depth > 1:
                self._readers[me] = depth - 1
                return
            del self._readers[me]
            if not self._readers:
                self._condition.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._readers:
                msg = (
                    "Cannot upgrade read lock to write lock. "
                    "Release the read lock first."
                )
                raise RuntimeError(msg)
            if self._writer == me:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                self._wait_while(
                    lambda: bool(self._readers) or self._writer is not None,
                    deadline,
                    "write",
                )
                self._writer = me
            finally:
                # Readers spin on _waiting_writers; wake them whether we got
                # the lock or timed out.
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._writer = None
            self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of distinct threads currently holding the read lock."""
        with self._condition:
            return len(self._readers)

    @property
    def writer_active(self) -> bool:
        """True while some thread holds the write lock."""
        with self._condition:
            return self._writer is not None
