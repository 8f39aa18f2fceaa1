"""UDP server receiving voxel packets and feeding them to the database."""

from __future__ import annotations

import logging
import os
import socket
import threading
from typing import Iterable, Optional, Protocol

from .bounded_queue import BoundedQueue
from .packet import Voxel
from .session import BATCH_QUEUE_CAPACITY, VoxBatch, handle_datagram
from .thread_pool import ThreadPool

logger = logging.getLogger(__name__)

RECEIVE_BUFFER_SIZE = 2048
_POLL_INTERVAL = 0.1
_IDLE_SLEEP = 0.001


class BulkInserter(Protocol):
    def insert_bulk(self, voxels: Iterable[Voxel]) -> None:
        ...


class UdpServer:
    """Receives datagrams on a UDP port, parses them on workers, inserts batches."""

    def __init__(
        self,
        port: int,
        pipeline: BulkInserter,
        n_workers: Optional[int] = None,
    ) -> None:
        if n_workers is None:
            n_workers = os.cpu_count() or 1
        self._pipeline = pipeline
        self._queue: BoundedQueue[VoxBatch] = BoundedQueue(BATCH_QUEUE_CAPACITY)
        self._stopped = threading.Event()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._socket.bind(("0.0.0.0", port))
        except OSError:
            self._socket.close()
            raise
        self._socket.settimeout(_POLL_INTERVAL)
        self.port: int = self._socket.getsockname()[1]
        self._pool = ThreadPool(n_workers)
        self._pool.post(self._db_loop)

    def run(self) -> None:
        """Receive datagrams until `stop` is called."""
        while not self._stopped.is_set():
            try:
                data, (host, port) = self._socket.recvfrom(RECEIVE_BUFFER_SIZE)
            except socket.timeout:
                continue
            except OSError:
                if self._stopped.is_set():
                    break
                raise
            if not data:
                continue
            logger.info("[UDP] Received %d bytes from %s:%d", len(data), host, port)
            try:
                self._pool.post(lambda data=data: handle_datagram(data, self._queue))
            except RuntimeError:
                break

    def stop(self) -> None:
        """Stop receiving, stop the workers and close the socket."""
        self._stopped.set()
        self._pool.shutdown()
        self._socket.close()

    def _db_loop(self) -> None:
        while not self._stopped.is_set():
            batch = self._queue.pop()
            if batch is None:
                self._stopped.wait(_IDLE_SLEEP)
                continue
            try:
                self._pipeline.insert_bulk(batch.voxels)
            except Exception as exc:
                logger.error("[DB] %s", exc)