"""A small thread-safe bounded packet store."""

import threading


class PacketQueue:
    """Holds packets; when full, the newest stored packet is replaced.

    Packets are taken out most-recent first. A ``max_size`` of zero or less
    means the queue is unbounded.
    """

    def __init__(self, max_size=0):
        self.max_size = max_size
        self._items = []
        self._lock = threading.Lock()

    def push(self, msg):
        """Add a packet, evicting the newest one if the queue is full."""
        with self._lock:
            if self.max_size > 0 and len(self._items) >= self.max_size:
                self._items.pop()
            self._items.append(msg)

    def pop(self):
        """Remove and return the newest packet, or None when empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.pop()

    def all(self):
        """Remove and return every stored packet, oldest first."""
        with self._lock:
            items, self._items = self._items, []
            return items

    def __len__(self):
        with self._lock:
            return len(self._items)