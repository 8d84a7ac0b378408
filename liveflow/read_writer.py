"""Buffered reader/writer with sticky errors over a binary stream."""


class ReadWriter:
    """Buffers reads and writes on a binary stream.

    The first error on the read side, or on the write side, is kept in
    ``read_error`` / ``write_error`` and raised again on every later call.
    """

    def __init__(self, stream, buffer_size=4096):
        if buffer_size <= 0:
            raise ValueError(f"buffer size must be positive, got {buffer_size}")
        self._stream = stream
        self.buffer_size = buffer_size
        self._rbuf = bytearray()
        self._wbuf = bytearray()
        self.read_error = None
        self.write_error = None
        self._read_some = getattr(stream, "read1", None) or stream.read

    def _fill(self, n):
        while len(self._rbuf) < n:
            chunk = self._read_some(max(self.buffer_size, n - len(self._rbuf)))
            if not chunk:
                return False
            self._rbuf += chunk
        return True

    def _take(self, n):
        if self.read_error is not None:
            raise self.read_error
        try:
            complete = self._fill(n)
        except OSError as exc:
            self.read_error = exc
            raise
        if not complete:
            partial = bool(self._rbuf)
            self._rbuf.clear()
            self.read_error = EOFError(
                "unexpected end of stream" if partial else "end of stream"
            )
            raise self.read_error
        data = bytes(self._rbuf[:n])
        del self._rbuf[:n]
        return data

    def read(self, size):
        """Read exactly ``size`` bytes."""
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        return self._take(size)

    def read_uint_be(self, n):
        """Read ``n`` bytes as a big-endian integer truncated to 32 bits."""
        return int.from_bytes(self._take(n), "big") & 0xFFFFFFFF

    def read_uint_le(self, n):
        """Read ``n`` bytes as a little-endian integer truncated to 32 bits."""
        return int.from_bytes(self._take(n), "little") & 0xFFFFFFFF

    def peek(self, n):
        """Return the next ``n`` bytes without consuming them."""
        if n < 0:
            raise ValueError(f"n must not be negative, got {n}")
        if not self._fill(n):
            raise EOFError("end of stream")
        return bytes(self._rbuf[:n])

    def discard(self, n):
        """Skip ``n`` bytes and return how many were skipped."""
        if n < 0:
            raise ValueError(f"n must not be negative, got {n}")
        complete = self._fill(n)
        skipped = min(n, len(self._rbuf))
        del self._rbuf[:skipped]
        if not complete:
            raise EOFError(f"end of stream after {skipped} bytes")
        return skipped

    def _flush_buffer(self):
        try:
            self._stream.write(bytes(self._wbuf))
            flush = getattr(self._stream, "flush", None)
            if flush is not None:
                flush()
        except OSError as exc:
            self.write_error = exc
            raise
        self._wbuf.clear()

    def write(self, data):
        """Buffer ``data`` and return its length."""
        if self.write_error is not None:
            raise self.write_error
        self._wbuf += data
        if len(self._wbuf) >= self.buffer_size:
            self._flush_buffer()
        return len(data)

    def _write_int(self, value, n, order):
        if self.write_error is not None:
            raise self.write_error
        if n < 0:
            raise ValueError(f"n must not be negative, got {n}")
        value &= 0xFFFFFFFF
        value &= (1 << (8 * n)) - 1
        self.write(value.to_bytes(n, order))

    def write_uint_be(self, value, n):
        """Write the low ``n`` bytes of a 32-bit value, most significant first."""
        self._write_int(value, n, "big")

    def write_uint_le(self, value, n):
        """Write the low ``n`` bytes of a 32-bit value, least significant first."""
        self._write_int(value, n, "little")

    def flush(self):
        """Send buffered output to the stream."""
        if self.write_error is not None:
            raise self.write_error
        if self._wbuf:
            self._flush_buffer()