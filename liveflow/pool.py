"""A bump allocator handing out views into large shared buffers."""

MAX_POOL_SIZE = 500 * 1024


class Pool:
    """Hands out consecutive slices of a buffer, starting a new buffer when full."""

    def __init__(self):
        self._pos = 0
        self._buf = bytearray(MAX_POOL_SIZE)

    def get(self, size):
        """Return a writable view of ``size`` bytes."""
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        if size > MAX_POOL_SIZE:
            raise ValueError(f"size {size} exceeds pool size {MAX_POOL_SIZE}")
        if MAX_POOL_SIZE - self._pos < size:
            self._pos = 0
            self._buf = bytearray(MAX_POOL_SIZE)
        view = memoryview(self._buf)[self._pos:self._pos + size]
        self._pos += size
        return view