"""RTMP chunk streams: reading chunk headers and payloads, writing messages as chunks."""

from dataclasses import dataclass, field

from liveflow.pio import u32be

TAG_AUDIO = 8
TAG_VIDEO = 9
TAG_SCRIPTDATAAMF0 = 18
TAG_SCRIPTDATAAMF3 = 15

_MAX_TIMESTAMP = 0xFFFFFF
_MAX_LENGTH = 0xFFFFFF
_U32 = 0xFFFFFFFF


@dataclass
class ChunkStream:
    """One RTMP message together with the state needed to reassemble its chunks."""

    format: int = 0
    csid: int = 0
    timestamp: int = 0
    length: int = 0
    type_id: int = 0
    stream_id: int = 0
    data: bytes = b""
    time_delta: int = field(default=0, init=False, repr=False, compare=False)
    extended: bool = field(default=False, init=False, repr=False, compare=False)
    index: int = field(default=0, init=False, repr=False, compare=False)
    remain: int = field(default=0, init=False, repr=False, compare=False)
    complete: bool = field(default=False, init=False, repr=False, compare=False)
    tmp_format: int = field(default=0, init=False, repr=False, compare=False)

    def _start_message(self, pool):
        self.complete = False
        self.index = 0
        self.remain = self.length
        self.data = pool.get(self.length)

    def _read_extended(self, rw, value):
        if value == _MAX_TIMESTAMP:
            self.extended = True
            return rw.read_uint_be(4)
        self.extended = False
        return value

    def read_chunk(self, rw, chunk_size, pool):
        """Read one chunk whose basic header has set ``tmp_format`` and ``csid``."""
        if self.remain != 0 and self.tmp_format != 3:
            raise ValueError(f"invalid remain = {self.remain}")

        if self.csid == 0:
            self.csid = rw.read_uint_le(1) + 64
        elif self.csid == 1:
            self.csid = rw.read_uint_le(2) + 64

        fmt = self.tmp_format
        if fmt == 0:
            self.format = fmt
            timestamp = rw.read_uint_be(3)
            self.length = rw.read_uint_be(3)
            self.type_id = rw.read_uint_be(1)
            self.stream_id = rw.read_uint_le(4)
            self.timestamp = self._read_extended(rw, timestamp)
            self._start_message(pool)
        elif fmt in (1, 2):
            self.format = fmt
            delta = rw.read_uint_be(3)
            if fmt == 1:
                self.length = rw.read_uint_be(3)
                self.type_id = rw.read_uint_be(1)
            delta = self._read_extended(rw, delta)
            self.time_delta = delta
            self.timestamp = (self.timestamp + delta) & _U32
            self._start_message(pool)
        elif fmt == 3:
            if self.remain == 0:
                if self.format == 0:
                    if self.extended:
                        self.timestamp = rw.read_uint_be(4)
                elif self.format in (1, 2):
                    delta = rw.read_uint_be(4) if self.extended else self.time_delta
                    self.timestamp = (self.timestamp + delta) & _U32
                self._start_message(pool)
            elif self.extended and u32be(rw.peek(4)) == self.timestamp:
                rw.discard(4)
        else:
            raise ValueError(f"invalid format={self.format}")

        size = min(self.remain, chunk_size)
        self.data[self.index:self.index + size] = rw.read(size)
        self.index += size
        self.remain -= size
        if self.remain == 0:
            self.complete = True

    def write_header(self, rw):
        """Write the basic header, message header and any extended timestamp."""
        head = (self.format << 6) & 0xFF
        if self.csid < 64:
            rw.write_uint_be(head | self.csid, 1)
        elif self.csid - 64 < 256:
            rw.write_uint_be(head, 1)
            rw.write_uint_le(self.csid - 64, 1)
        elif self.csid - 64 < 65536:
            rw.write_uint_be(head | 1, 1)
            rw.write_uint_le(self.csid - 64, 2)
        else:
            raise ValueError(f"chunk stream id {self.csid} out of range")

        ts = self.timestamp
        if self.format != 3:
            if ts > _MAX_TIMESTAMP:
                ts = _MAX_TIMESTAMP
            rw.write_uint_be(ts, 3)
            if self.format != 2:
                if self.length > _MAX_LENGTH:
                    raise ValueError(f"length={self.length}")
                rw.write_uint_be(self.length, 3)
                rw.write_uint_be(self.type_id, 1)
                if self.format != 1:
                    rw.write_uint_le(self.stream_id, 4)
        if ts >= _MAX_TIMESTAMP:
            rw.write_uint_be(self.timestamp, 4)

    def write_chunk(self, rw, chunk_size):
        """Write the whole message, split into chunks of ``chunk_size`` bytes."""
        if chunk_size <= 0:
            raise ValueError(f"chunk size must be positive, got {chunk_size}")
        if self.type_id == TAG_AUDIO:
            self.csid = 4
        elif self.type_id in (TAG_VIDEO, TAG_SCRIPTDATAAMF0, TAG_SCRIPTDATAAMF3):
            self.csid = 6

        total = 0
        data_len = len(self.data)
        for i in range(self.length // chunk_size + 1):
            if total == self.length:
                break
            self.format = 0 if i == 0 else 3
            self.write_header(rw)
            start = i * chunk_size
            inc = max(0, min(chunk_size, data_len - start))
            total += inc
            rw.write(self.data[start:start + inc])