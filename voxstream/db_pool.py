"""A fixed-size pool of database connections shared between threads."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

C = TypeVar("C")


class DbPool(Generic[C]):
    """Holds `size` connections made by `connect` and lends them out one at a time."""

    def __init__(self, connect: Callable[[], C], size: int) -> None:
        if size <= 0:
            raise ValueError("DbPool: size must be > 0")
        self._conns: list[C] = [connect() for _ in range(size)]
        self._busy: list[bool] = [False] * size
        self._cond = threading.Condition()

    @contextmanager
    def acquire(self) -> Iterator[C]:
        """Borrow the first free connection, waiting until one is free."""
        conn = self._take()
        try:
            yield conn
        finally:
            self.release(conn)

    def release(self, conn: C) -> None:
        """Hand a borrowed connection back to the pool."""
        with self._cond:
            for index, candidate in enumerate(self._conns):
                if candidate is conn:
                    self._busy[index] = False
                    self._cond.notify()
                    return
        raise ValueError("DbPool: trying to release unknown connection")

    def _take(self) -> C:
        with self._cond:
            self._cond.wait_for(lambda: not all(self._busy))
            for index, conn in enumerate(self._conns):
                if not self._busy[index]:
                    self._busy[index] = True
                    return conn
        raise RuntimeError("DbPool: no available connection after wait")