"""A fixed-size pool of worker threads running posted jobs."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable

logger = logging.getLogger(__name__)


class ThreadPool:
    """Runs posted callables on `n` worker threads, first in first out."""

    def __init__(self, n: int) -> None:
        self._jobs: deque[Callable[[], object]] = deque()
        self._cond = threading.Condition()
        self._stopping = False
        self._workers = [
            threading.Thread(target=self._worker_loop, name=f"voxstream-worker-{i}", daemon=True)
            for i in range(n)
        ]
        for worker in self._workers:
            worker.start()

    def post(self, job: Callable[[], object]) -> None:
        """Queue a callable for a worker to run."""
        with self._cond:
            if self._stopping:
                raise RuntimeError("thread pool is shut down")
            self._jobs.append(job)
            self._cond.notify()

    def shutdown(self) -> None:
        """Stop the workers and wait for them; jobs not yet started are dropped."""
        with self._cond:
            self._stopping = True
            self._cond.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _worker_loop(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._stopping or bool(self._jobs))
                if self._stopping and not self._jobs:
                    return
                job = self._jobs.popleft()
            try:
                job()
            except Exception:
                logger.exception("job raised an exception")
            with self._cond:
                if self._stopping:
                    return