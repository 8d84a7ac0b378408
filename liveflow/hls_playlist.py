"""HLS segments and the rolling cache that produces the m3u8 playlist."""

import threading
from collections import OrderedDict
from dataclasses import dataclass

MAX_TS_CACHE_NUM = 3


@dataclass(frozen=True)
class TSItem:
    """One MPEG-TS segment: its URL path, duration in ms, sequence number and bytes."""

    name: str
    duration: int
    seq_num: int
    data: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, "data", bytes(self.data))


class NoKeyError(LookupError):
    """Raised when a segment is not in the cache."""

    def __init__(self, key=None):
        super().__init__("No key for cache")
        self.key = key

    def __str__(self):
        return "No key for cache"


class TSCache:
    """Keeps the most recent ``num`` segments of one stream, oldest first."""

    def __init__(self, id, num=MAX_TS_CACHE_NUM):
        self.id = id
        self.num = num
        self._items = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._items)

    def set_item(self, key, item):
        """Add a segment, dropping the oldest one when the cache is full."""
        with self._lock:
            if key in self._items:
                del self._items[key]
            elif len(self._items) >= self.num:
                self._items.popitem(last=False)
            self._items[key] = item

    def get_item(self, key):
        """Return the segment stored under ``key``."""
        with self._lock:
            try:
                return self._items[key]
            except KeyError:
                raise NoKeyError(key) from None

    def gen_m3u8_playlist(self):
        """Render the live playlist for the cached segments as bytes."""
        with self._lock:
            items = list(self._items.values())
        max_duration = max((item.duration for item in items), default=0)
        seq = items[0].seq_num if items else 0
        header = (
            "#EXTM3U\n#EXT-X-VERSION:3\n#EXT-X-ALLOW-CACHE:NO\n"
            f"#EXT-X-TARGETDURATION:{max_duration // 1000 + 1}\n"
            f"#EXT-X-MEDIA-SEQUENCE:{seq}\n\n"
        )
        body = "".join(
            f"#EXTINF:{item.duration / 1000:.3f},\n{item.name}\n" for item in items
        )
        return (header + body).encode("utf-8")