"""Timestamp alignment, segment status and audio frame batching for HLS."""

import time

SYNC_MS = 2
H264_DEFAULT_HZ = 90
CACHE_MAX_FRAMES = 6
AUDIO_CACHE_LEN = 10 * 1024


class Align:
    """Snaps audio timestamps onto an evenly spaced grid when they are close enough."""

    def __init__(self):
        self.frame_num = 0
        self.frame_base = 0

    def align(self, dts, inc):
        """Return ``dts`` snapped to the estimated grid, or restart the grid at it."""
        estimated = self.frame_base + self.frame_num * inc
        if abs(estimated - dts) <= SYNC_MS * H264_DEFAULT_HZ:
            self.frame_num += 1
            return estimated
        self.frame_num = 1
        self.frame_base = dts
        return dts


class Status:
    """Tracks the first and last timestamps of the segment being built."""

    def __init__(self):
        self.has_video = False
        self.seq_id = 0
        self.created_at = None
        self.seg_begin_at = time.time()
        self.has_set_first_ts = False
        self.first_timestamp = 0
        self.last_timestamp = 0

    def update(self, is_video, timestamp):
        """Record a packet's timestamp."""
        if is_video:
            self.has_video = True
        if not self.has_set_first_ts:
            self.has_set_first_ts = True
            self.first_timestamp = timestamp
        self.last_timestamp = timestamp

    def reset_and_new(self):
        """Start a new segment."""
        self.seq_id += 1
        self.has_video = False
        self.created_at = time.time()
        self.has_set_first_ts = False

    def duration_ms(self):
        """Span between the first and last timestamps of the segment."""
        return self.last_timestamp - self.first_timestamp


class AudioCache:
    """Batches consecutive audio frames; the batch keeps the first frame's pts."""

    def __init__(self):
        self.sound_format = 0
        self.num = 0
        self.offset = 0
        self.pts = 0
        self._buf = bytearray()

    def cache(self, data, pts):
        """Append a frame, starting a new batch when the previous one was taken."""
        if self.num == 0:
            self.offset = 0
            self.pts = pts
            self._buf.clear()
        self._buf += data
        self.offset += len(data)
        self.num += 1

    def get_frame(self):
        """Take the batch as ``(length, pts, data)``."""
        self.num = 0
        return self.offset, self.pts, bytes(self._buf)