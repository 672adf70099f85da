# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.utils.multithread

Multi-threading utilities.

"""

from threading import Condition, Lock


def _wait_timeout(blocking: bool, timeout: float) -> float | None:
    if not blocking:
        return 0
    return None if timeout < 0 else timeout


class ReadLock:

    """Shared side of a ReadWriteLock."""

    def __init__(self, rwlock: 'ReadWriteLock'):
        self._rwlock = rwlock

    def acquire(self, blocking=True, timeout=-1) -> bool:
        """Acquire the lock.

        Waits while a writer holds the lock or is waiting for it.

        """
        rw = self._rwlock
        with rw._cond:
            if not rw._cond.wait_for(
                    lambda: not rw._writing and not rw._writers_waiting,
                    _wait_timeout(blocking, timeout)):
                return False
            rw._readers += 1
            return True

    def release(self):
        """Release the lock."""
        rw = self._rwlock
        with rw._cond:
            if not rw._readers:
                raise RuntimeError("release unlocked lock")
            rw._readers -= 1
            if not rw._readers:
                rw._cond.notify_all()

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, *args):
        self.release()


class WriteLock:

    """Exclusive side of a ReadWriteLock."""

    def __init__(self, rwlock: 'ReadWriteLock'):
        self._rwlock = rwlock

    def acquire(self, blocking=True, timeout=-1) -> bool:
        """Acquire the lock.

        Waits until no reader and no other writer holds the lock.

        """
        rw = self._rwlock
        with rw._cond:
            rw._writers_waiting += 1
            try:
                if not rw._cond.wait_for(
                        lambda: not rw._writing and not rw._readers,
                        _wait_timeout(blocking, timeout)):
                    return False
            finally:
                rw._writers_waiting -= 1
                if not rw._writers_waiting:
                    # Readers held back by this writer may go on
                    rw._cond.notify_all()
            rw._writing = True
            return True

    def release(self):
        """Release the lock."""
        rw = self._rwlock
        with rw._cond:
            if not rw._writing:
                raise RuntimeError("release unlocked lock")
            rw._writing = False
            rw._cond.notify_all()

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, *args):
        self.release()


class ReadWriteLock:

    """Simple writer-preferring read-write lock class.

    Any number of threads may hold the read lock at once,
    the write lock excludes everyone else. Neither side is reentrant.

    """

    def __init__(self):
        self._cond = Condition(Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0
        self._rlock = ReadLock(self)
        self._wlock = WriteLock(self)

    @property
    def rlock(self) -> ReadLock:
        """Return the read lock."""
        return self._rlock

    @property
    def wlock(self) -> WriteLock:
        """Return the write lock."""
        return self._wlock
