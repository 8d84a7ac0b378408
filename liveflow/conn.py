"""An RTMP connection: chunk reassembly, control messages and acknowledgements."""

import copy

from liveflow.chunk import ChunkStream
from liveflow.pio import put_u32be, u32be
from liveflow.pool import Pool
from liveflow.read_writer import ReadWriter

ID_SET_CHUNK_SIZE = 1
ID_ABORT_MESSAGE = 2
ID_ACK = 3
ID_USER_CONTROL_MESSAGES = 4
ID_WINDOW_ACK_SIZE = 5
ID_SET_PEER_BANDWIDTH = 6

STREAM_BEGIN = 0
STREAM_EOF = 1
STREAM_DRY = 2
SET_BUFFER_LEN = 3
STREAM_IS_RECORDED = 4
PING_REQUEST = 6
PING_RESPONSE = 7

DEFAULT_CHUNK_SIZE = 128
DEFAULT_WINDOW_ACK_SIZE = 2500000


def _control_message(type_id, size, value):
    data = bytearray(size)
    put_u32be(data, value, 0)
    return ChunkStream(format=0, csid=2, type_id=type_id, stream_id=0, length=size, data=data)


class Conn:
    """Reads and writes RTMP messages over a binary stream."""

    def __init__(self, stream, buffer_size=4 * 1024):
        self.stream = stream
        self.rw = ReadWriter(stream, buffer_size)
        self.chunk_size = DEFAULT_CHUNK_SIZE
        self.remote_chunk_size = DEFAULT_CHUNK_SIZE
        self.window_ack_size = DEFAULT_WINDOW_ACK_SIZE
        self.remote_window_ack_size = DEFAULT_WINDOW_ACK_SIZE
        self.received = 0
        self.ack_received = 0
        self.pool = Pool()
        self.chunks = {}

    def read(self):
        """Read chunks until one message is complete and return it."""
        while True:
            head = self.rw.read_uint_be(1)
            fmt = head >> 6
            csid = head & 0x3F
            chunk = copy.copy(self.chunks.get(csid) or ChunkStream())
            chunk.tmp_format = fmt
            chunk.csid = csid
            chunk.read_chunk(self.rw, self.remote_chunk_size, self.pool)
            self.chunks[csid] = chunk
            if chunk.complete:
                break

        message = copy.copy(chunk)
        message.data = bytes(chunk.data)
        self._handle_control_message(message)
        self._ack(message.length)
        return message

    def write(self, chunk):
        """Write a message, applying a chunk size change it carries."""
        if chunk.type_id == ID_SET_CHUNK_SIZE:
            self.chunk_size = u32be(chunk.data)
        chunk.write_chunk(self.rw, self.chunk_size)

    def flush(self):
        """Send buffered output."""
        self.rw.flush()

    def close(self):
        """Close the underlying stream."""
        self.stream.close()

    def new_ack(self, size):
        """Build an acknowledgement message."""
        return _control_message(ID_ACK, 4, size)

    def new_set_chunk_size(self, size):
        """Build a set-chunk-size message."""
        return _control_message(ID_SET_CHUNK_SIZE, 4, size)

    def new_window_ack_size(self, size):
        """Build a window-acknowledgement-size message."""
        return _control_message(ID_WINDOW_ACK_SIZE, 4, size)

    def new_set_peer_bandwidth(self, size):
        """Build a set-peer-bandwidth message with the dynamic limit type."""
        chunk = _control_message(ID_SET_PEER_BANDWIDTH, 5, size)
        chunk.data[4] = 2
        return chunk

    def _handle_control_message(self, chunk):
        if chunk.type_id == ID_SET_CHUNK_SIZE:
            self.remote_chunk_size = u32be(chunk.data)
        elif chunk.type_id == ID_WINDOW_ACK_SIZE:
            self.remote_window_ack_size = u32be(chunk.data)

    def _ack(self, size):
        self.received = (self.received + size) & 0xFFFFFFFF
        self.ack_received = (self.ack_received + size) & 0xFFFFFFFF
        if self.received >= 0xF0000000:
            self.received = 0
        if self.ack_received >= self.remote_window_ack_size:
            self.new_ack(self.ack_received).write_chunk(self.rw, self.chunk_size)
            self.ack_received = 0

    def _user_control_message(self, event_type, value):
        data = bytearray(6)
        data[0] = (event_type >> 8) & 0xFF
        data[1] = event_type & 0xFF
        put_u32be(data, value, 2)
        return ChunkStream(format=0, csid=2, type_id=ID_USER_CONTROL_MESSAGES,
                           stream_id=1, length=6, data=data)

    def set_begin(self):
        """Send a stream-begin event for stream 1."""
        self.write(self._user_control_message(STREAM_BEGIN, 1))

    def set_recorded(self):
        """Send a stream-is-recorded event for stream 1."""
        self.write(self._user_control_message(STREAM_IS_RECORDED, 1))