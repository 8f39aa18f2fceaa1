"""A thread-safe FIFO queue with a fixed capacity that never blocks."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class BoundedQueue(Generic[T]):
    """FIFO queue that refuses new items once it holds `capacity` of them."""

    def __init__(self, capacity: int = 8192) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    def push(self, item: T) -> bool:
        """Append an item; return False if the queue is full."""
        with self._lock:
            if len(self._items) >= self._capacity:
                return False
            self._items.append(item)
            return True

    def pop(self) -> Optional[T]:
        """Remove and return the oldest item, or None if the queue is empty."""
        with self._lock:
            return self._items.popleft() if self._items else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)