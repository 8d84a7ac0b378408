import io

import pytest

from liveflow.chunk import ChunkStream
from liveflow.pool import Pool
from liveflow.read_writer import ReadWriter


def _next_chunk(rw, chunk, pool):
    head = rw.read_uint_be(1)
    chunk.tmp_format = head >> 6
    chunk.csid = head & 0x3F
    chunk.read_chunk(rw, 128, pool)


def test_chunk_read_plain():
    data = bytes([0x06, 0x00, 0x00, 0x00, 0x00, 0x01, 0x33, 0x09, 0x01, 0x00, 0x00, 0x00])
    data += bytes(128) + b"\xc6" + bytes(128) + b"\xc6" + bytes(51)
    rw = ReadWriter(io.BytesIO(data), 1024)
    chunk = ChunkStream()
    pool = Pool()
    while True:
        _next_chunk(rw, chunk, pool)
        if chunk.remain == 0:
            break
    assert chunk.length == 307
    assert chunk.type_id == 9
    assert chunk.stream_id == 1
    assert len(chunk.data) == 307
    assert chunk.remain == 0
    assert chunk.complete


def test_chunk_read_extended_timestamp():
    data = bytes([
        0x06, 0xFF, 0xFF, 0xFF, 0x00, 0x01, 0x33, 0x09,
        0x01, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x05,
    ])
    data += bytes(128) + b"\xc6" + bytes([0, 0, 0, 5]) + bytes(128) + b"\xc6" + bytes(51)
    rw = ReadWriter(io.BytesIO(data), 1024)
    chunk = ChunkStream()
    pool = Pool()
    for _ in range(3):
        _next_chunk(rw, chunk, pool)
    assert chunk.length == 307
    assert chunk.type_id == 9
    assert chunk.stream_id == 1
    assert len(chunk.data) == 307
    assert chunk.extended is True
    assert chunk.timestamp == 5
    assert chunk.remain == 0


def test_write_chunk_length():
    chunk = ChunkStream(length=307, type_id=9, csid=4, timestamp=40, data=bytes(307))
    out = io.BytesIO()
    rw = ReadWriter(out, 1024)
    chunk.write_chunk(rw, 128)
    rw.flush()
    assert len(out.getvalue()) == 321
    assert chunk.csid == 6


def test_write_then_read_round_trip():
    payload = bytes(i % 251 for i in range(307))
    chunk = ChunkStream(length=307, type_id=9, timestamp=1000, stream_id=1, data=payload)
    out = io.BytesIO()
    writer = ReadWriter(out, 1024)
    chunk.write_chunk(writer, 128)
    writer.flush()

    rw = ReadWriter(io.BytesIO(out.getvalue()), 1024)
    back = ChunkStream()
    pool = Pool()
    while True:
        _next_chunk(rw, back, pool)
        if back.remain == 0:
            break
    assert bytes(back.data) == payload
    assert back.timestamp == 1000
    assert back.csid == 6
    assert back.stream_id == 1


def test_write_header_extended_timestamp():
    chunk = ChunkStream(format=0, csid=3, timestamp=0x1000000, length=0, type_id=8, stream_id=1)
    out = io.BytesIO()
    rw = ReadWriter(out, 1024)
    chunk.write_header(rw)
    rw.flush()
    assert out.getvalue() == bytes([
        0x03, 0xFF, 0xFF, 0xFF, 0x00, 0x00, 0x00, 0x08,
        0x01, 0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00,
    ])


@pytest.mark.parametrize(
    "fmt, csid, timestamp, expected",
    [
        (3, 100, 0, bytes([0xC0, 36])),
        (3, 400, 0, bytes([0xC1, 0x50, 0x01])),
        (2, 4, 40, bytes([0x84, 0x00, 0x00, 0x28])),
    ],
)
def test_write_header_forms(fmt, csid, timestamp, expected):
    chunk = ChunkStream(format=fmt, csid=csid, timestamp=timestamp)
    out = io.BytesIO()
    rw = ReadWriter(out, 1024)
    chunk.write_header(rw)
    rw.flush()
    assert out.getvalue() == expected


def test_write_header_rejects_large_length():
    chunk = ChunkStream(format=0, csid=3, length=0x1000000)
    with pytest.raises(ValueError):
        chunk.write_header(ReadWriter(io.BytesIO(), 1024))


def test_read_chunk_rejects_new_header_mid_message():
    chunk = ChunkStream()
    chunk.remain = 5
    chunk.tmp_format = 0
    with pytest.raises(ValueError):
        chunk.read_chunk(ReadWriter(io.BytesIO(b""), 1024), 128, Pool())


def test_read_chunk_end_of_stream():
    chunk = ChunkStream(csid=6)
    rw = ReadWriter(io.BytesIO(bytes([0x00, 0x00])), 1024)
    with pytest.raises(EOFError):
        chunk.read_chunk(rw, 128, Pool())