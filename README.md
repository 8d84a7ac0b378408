# liveflow

This package holds the pieces a live video server uses between a publisher and
its viewers. There is RTMP framing and connection handling, a media packet
model, and HLS playlist and segment serving. Each piece is a plain Python module
that needs only the standard library.

## Modules

- `liveflow.read_writer`: `ReadWriter` buffers reads and writes on a binary
  stream. It has `read`, `read_uint_be`, `read_uint_le`, `peek`, `discard`,
  `write`, `write_uint_be`, `write_uint_le` and `flush`. Once a read or a write
  fails, the error is kept in `read_error` or `write_error` and is raised again
  on every later call on that side.
- `liveflow.chunk`: `ChunkStream` is one RTMP message.
  - `read_chunk` reassembles a message from chunks of header formats 0 to 3,
    including extended timestamps.
  - `write_header` and `write_chunk` split a message into chunks. Audio goes on
    chunk stream 4. Video and metadata go on chunk stream 6.
- `liveflow.conn`: `Conn` reads whole messages with `read` and writes them with
  `write` and `flush`.
  - It tracks set-chunk-size and window-acknowledgement-size messages from
    either side.
  - It sends acknowledgements when the window fills.
  - `new_ack`, `new_set_chunk_size`, `new_window_ack_size` and
    `new_set_peer_bandwidth` build control messages.
  - `set_begin` and `set_recorded` send user-control events.
- `liveflow.handshake`: `handshake_client` and `handshake_server` run on a
  `Conn`.
  - The server accepts the plain handshake and the digest (HMAC-SHA256)
    handshake.
  - `make_digest`, `calc_digest_pos`, `find_digest`, `parse_c1`, `create_s0s1`
    and `create_s2` are the helpers behind them.
  - A bad version byte or an invalid C1 raises `HandshakeError`.
- `liveflow.media`: `Packet`, `VideoHeader`, `AudioHeader` and `Info`.
  `Packet.type_id()` gives the message type a packet is sent as.
- `liveflow.bandwidth`: `BandwidthStats.save` counts video and audio bytes. Once
  at least 5000 ms have passed since the last estimate, it recomputes the speed
  in kbit/s.
- `liveflow.hls_playlist`:
  - `TSItem` is one segment.
  - `TSCache` keeps the last three segments of a stream by default and renders
    them with `gen_m3u8_playlist`.
  - `get_item` raises `NoKeyError` for an unknown segment.
- `liveflow.hls_timing`:
  - `Align` snaps audio timestamps onto an even grid.
  - `Status` tracks the span of the segment being built.
  - `AudioCache` batches audio frames.
- `liveflow.hls_server`: `HLSServer.handle(path)` answers `.m3u8`, `.ts` and
  `crossdomain.xml` requests with an `HLSResponse`, drawing on caches registered
  with `add_cache`. `parse_m3u8_key` and `parse_ts_key` turn a request path into
  a stream key.
- Utilities:
  - `liveflow.pio` has big- and little-endian integer readers (`u16be`, `u32be`,
    `u64be` and others) and writers (`put_u32be`, `put_u64be` and others).
  - `liveflow.pool.Pool` hands out slices of a shared buffer.
  - `liveflow.packet_queue.PacketQueue` is a bounded, thread-safe packet store.

## Install

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Examples

Write one RTMP message as chunks:

```python
import io
from liveflow.read_writer import ReadWriter
from liveflow.chunk import ChunkStream

buf = io.BytesIO()
rw = ReadWriter(buf)
chunk = ChunkStream(csid=4, timestamp=40, length=307, type_id=9, data=bytes(307))
chunk.write_chunk(rw, 128)
rw.flush()
assert len(buf.getvalue()) == 321
```

Serve an HLS playlist from a segment cache:

```python
from liveflow.hls_playlist import TSCache, TSItem
from liveflow.hls_server import HLSServer

cache = TSCache("live/movie")
cache.set_item("/live/movie/1.ts", TSItem("/live/movie/1.ts", 3000, 1, b"..."))

server = HLSServer()
server.add_cache("live/movie", cache)
response = server.handle("/live/movie.m3u8")
print(response.status, response.body.decode())
```

Read big-endian integers:

```python
from liveflow import pio

pio.u32be(b"ABCD")  # 1094861636
```

## What it does not do

The package provides no command and no listening server. It does not open
sockets or run an HTTP server. You pass `Conn` any binary stream, and you map
`HLSServer.handle` onto whatever web framework you use.

Several parts of a full server are absent:

- passing packets from a publisher to many players;
- a cache that lets late joiners start on a key frame;
- HTTP-FLV output;
- an HTTP control or statistics API;
- muxing to MPEG-TS.