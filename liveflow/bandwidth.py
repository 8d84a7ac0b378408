"""Per-connection traffic counters and periodic speed estimates."""

import time
from dataclasses import dataclass

SAVE_STATICS_INTERVAL = 5000


@dataclass
class BandwidthStats:
    """Bytes sent or received per media type, with speeds in kbit/s."""

    stream_id: int = 0
    video_bytes: int = 0
    last_video_bytes: int = 0
    video_speed: int = 0
    audio_bytes: int = 0
    last_audio_bytes: int = 0
    audio_speed: int = 0
    last_timestamp: int = 0

    def save(self, stream_id, length, is_video, now_ms=None):
        """Count ``length`` bytes; recompute speeds once the interval has passed."""
        if now_ms is None:
            now_ms = time.time_ns() // 1_000_000
        self.stream_id = stream_id
        if is_video:
            self.video_bytes += length
        else:
            self.audio_bytes += length

        if self.last_timestamp == 0:
            self.last_timestamp = now_ms
        elif now_ms - self.last_timestamp >= SAVE_STATICS_INTERVAL:
            seconds = (now_ms - self.last_timestamp) // 1000
            self.video_speed = (self.video_bytes - self.last_video_bytes) * 8 // seconds // 1000
            self.audio_speed = (self.audio_bytes - self.last_audio_bytes) * 8 // seconds // 1000
            self.last_video_bytes = self.video_bytes
            self.last_audio_bytes = self.audio_bytes
            self.last_timestamp = now_ms